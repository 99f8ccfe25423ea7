from abc import ABC, abstractmethod

from shredder.pdf.models import DocumentInfo


class BasePdfInfoReader(ABC):
    """Contract for all PDF info-dictionary reading adapters."""

    @abstractmethod
    def read(self, pdf_bytes: bytes) -> DocumentInfo:
        """Read the document info dictionary and page count.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            DocumentInfo with absent fields set to None.

        Raises:
            DecodeError: if the document cannot be parsed.
        """
