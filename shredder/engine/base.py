from abc import ABC, abstractmethod

from shredder.engine.models import FileBuffer, Finding, Narrator, RedactedBlob


class BaseInspector(ABC):
    """Contract for all category-specific inspectors."""

    @abstractmethod
    def inspect(self, file: FileBuffer, narrate: Narrator) -> list[Finding]:
        """Describe the sensitive data present in *file*.

        Args:
            file: In-memory file as supplied by the caller.
            narrate: Progress sink; results never depend on it.

        Returns:
            Findings sorted by descending risk, never empty.

        Raises:
            DecodeError: if the format decoder cannot parse the buffer.
        """


class BaseRedactor(ABC):
    """Contract for all category-specific redactors."""

    @abstractmethod
    def redact(self, file: FileBuffer, narrate: Narrator) -> RedactedBlob:
        """Produce a sanitized replacement for *file*.

        Raises:
            DecodeError: if the input cannot be decoded.
            EncodeError: if the output cannot be serialized.
        """
