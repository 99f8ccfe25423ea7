from shredder.config.settings import Settings
from shredder.pdf.base import BasePdfInfoReader
from shredder.pdf.pdfplumber_adapter import PdfPlumberInfoReader
from shredder.pdf.pymupdf_adapter import PyMuPdfInfoReader


class PdfInfoReaderFactory:
    """Creates the correct PDF info reader based on settings."""

    ADAPTERS: dict[str, type[BasePdfInfoReader]] = {
        "pdfplumber": PdfPlumberInfoReader,
        "pymupdf": PyMuPdfInfoReader,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfInfoReader:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
