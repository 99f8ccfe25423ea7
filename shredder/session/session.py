"""Per-upload processing session driving the engine on behalf of a front end.

Stages: idle -> inspecting -> review -> shredding -> done. A failed
inspection returns to idle; a failed shred returns to review so the user
keeps the reviewed findings.
"""

import enum
import secrets
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from shredder.engine.engine import Shredder
from shredder.engine.exceptions import SessionStateError, UnsupportedFileTypeError
from shredder.engine.models import FileBuffer, FileCategory, Finding, RedactedBlob
from shredder.logging.logger import Log
from shredder.session.formatting import format_bytes


class Stage(str, enum.Enum):
    IDLE = "idle"
    INSPECTING = "inspecting"
    REVIEW = "review"
    SHREDDING = "shredding"
    DONE = "done"


class LogKind(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    PROCESS = "process"
    ACTION = "action"


_NARRATION_KINDS = (
    ("[ACTION]", LogKind.ACTION),
    ("[WARN]", LogKind.WARNING),
    ("[SUCCESS]", LogKind.SUCCESS),
    ("[ALERT]", LogKind.WARNING),
)


@dataclass(frozen=True)
class LogEntry:
    """One timestamped narration line."""

    id: str
    timestamp: str
    message: str
    kind: LogKind


class ProcessingSession:
    """Transient state for one selected file. Nothing is persisted."""

    def __init__(
        self,
        shredder: Shredder,
        output_prefix: str = "CLEAN_",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._shredder = shredder
        self._output_prefix = output_prefix
        self._clock = clock
        self._stage = Stage.IDLE
        self._file: FileBuffer | None = None
        self._category = FileCategory.UNSUPPORTED
        self._findings: list[Finding] = []
        self._output: RedactedBlob | None = None
        self._logs: list[LogEntry] = []

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def file(self) -> FileBuffer | None:
        return self._file

    @property
    def category(self) -> FileCategory:
        return self._category

    @property
    def findings(self) -> tuple[Finding, ...]:
        return tuple(self._findings)

    @property
    def output(self) -> RedactedBlob | None:
        return self._output

    @property
    def logs(self) -> tuple[LogEntry, ...]:
        return tuple(self._logs)

    @property
    def download_name(self) -> str:
        if self._file is None:
            raise SessionStateError("No file selected")
        return f"{self._output_prefix}{self._file.name}"

    def select_file(self, file: FileBuffer) -> list[Finding]:
        """Classify and inspect a newly selected file.

        Raises:
            SessionStateError: if an inspection or shred is in flight.
            UnsupportedFileTypeError: if the file classifies as unsupported.
            ShredderError: if inspection fails; the session is back to idle.
        """
        if self._stage in (Stage.INSPECTING, Stage.SHREDDING):
            raise SessionStateError(f"Cannot select a file while {self._stage.value}")

        category = self._shredder.classify(file.mime_type, file.name)
        if category is FileCategory.UNSUPPORTED:
            self._log(f"[ERROR] UNSUPPORTED_FILE_TYPE: {file.name}", LogKind.ERROR)
            self._clear_file()
            raise UnsupportedFileTypeError(
                f"Unsupported file type: {file.name}. "
                "Please use JPG, PNG, PDF, TXT, LOG, or JSON."
            )

        self._file = file
        self._category = category
        self._findings = []
        self._output = None
        self._stage = Stage.INSPECTING
        self._logs = []
        self._log(
            f"[INIT] SYSTEM_READY. NEW_SESSION_ID: {secrets.token_hex(3).upper()}",
            LogKind.INFO,
        )
        self._log(f"[INFO] LOADING_FILE: {file.name} ({format_bytes(file.size)})", LogKind.INFO)
        self._log(
            "Verification: File processing in Local Sandbox - No Network Activity Detected",
            LogKind.SUCCESS,
        )

        try:
            findings = self._shredder.inspect(file, category, self._narrate)
        except Exception as exc:
            self._log(f"[ERROR] INSPECTION_FAILED: {exc}", LogKind.ERROR)
            Log.error(f"Inspection of {file.name} failed: {exc}")
            self._clear_file()
            raise

        self._findings = findings
        self._stage = Stage.REVIEW
        self._log(
            f"[COMPLETE] METADATA_SCAN_FINISHED. {len(findings)} ITEMS_FOUND.",
            LogKind.SUCCESS,
        )
        return findings

    def shred(self) -> RedactedBlob:
        """Redact the reviewed file.

        Raises:
            SessionStateError: unless the session is in review.
            ShredderError: if redaction fails; the session is back in review.
        """
        if self._stage is not Stage.REVIEW or self._file is None:
            raise SessionStateError(f"Cannot shred while {self._stage.value}")

        self._stage = Stage.SHREDDING
        try:
            blob = self._shredder.redact(self._file, self._category, self._narrate)
        except Exception as exc:
            self._log(f"[ERROR] SHREDDING_FAILED: {exc}", LogKind.ERROR)
            Log.error(f"Redaction of {self._file.name} failed: {exc}")
            self._stage = Stage.REVIEW
            raise

        self._output = blob
        self._stage = Stage.DONE
        self._log("[SUCCESS] FILE_CLEANED_SUCCESSFULLY. READY_FOR_DOWNLOAD.", LogKind.SUCCESS)
        return blob

    def save(self, directory: Path) -> Path:
        """Write the cleaned artifact into *directory* as ``download_name``."""
        if self._output is None:
            raise SessionStateError("Nothing to save; shred the file first")
        path = directory / self.download_name
        path.write_bytes(self._output.data)
        Log.info(f"Saved {len(self._output.data)} bytes to {path}")
        return path

    def reset(self) -> None:
        self._clear_file()
        self._logs = []

    def _clear_file(self) -> None:
        self._file = None
        self._category = FileCategory.UNSUPPORTED
        self._stage = Stage.IDLE
        self._findings = []
        self._output = None

    def _narrate(self, message: str) -> None:
        kind = next(
            (mapped for tag, mapped in _NARRATION_KINDS if message.startswith(tag)),
            LogKind.PROCESS,
        )
        self._log(message, kind)

    def _log(self, message: str, kind: LogKind) -> None:
        self._logs.append(
            LogEntry(
                id=uuid.uuid4().hex[:8],
                timestamp=self._clock().strftime("%H:%M:%S"),
                message=message,
                kind=kind,
            )
        )
