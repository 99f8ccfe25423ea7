import enum
from collections.abc import Callable
from dataclasses import dataclass

Narrator = Callable[[str], None]


def silent(message: str) -> None:
    """Narrator that discards every message."""


class FileCategory(str, enum.Enum):
    """Processing category a file is routed to."""

    IMAGE = "image"
    DOCUMENT = "document"
    TEXT = "text"
    UNSUPPORTED = "unsupported"


class RiskLevel(str, enum.Enum):
    """Severity of a finding. Ordinals are used for sorting only."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def ordinal(self) -> int:
        return _RISK_ORDINALS[self]


_RISK_ORDINALS = {
    RiskLevel.HIGH: 3,
    RiskLevel.MEDIUM: 2,
    RiskLevel.LOW: 1,
    RiskLevel.NONE: 0,
}


@dataclass(frozen=True)
class Finding:
    """Single discovered metadata or sensitive-data item."""

    key: str
    display_value: str
    risk_level: RiskLevel


@dataclass(frozen=True)
class FileBuffer:
    """In-memory file handed to the engine by the caller."""

    name: str
    mime_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class RedactedBlob:
    """Sanitized output artifact."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class TranscodeResult:
    """Outcome of a best-effort HEIC transcode.

    On failure ``data`` is the untouched original buffer and ``warning``
    carries the reason.
    """

    data: bytes
    mime_type: str
    warning: str | None = None

    @property
    def converted(self) -> bool:
        return self.warning is None
