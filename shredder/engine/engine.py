import numpy as np

from shredder.config.settings import Settings
from shredder.engine.base import BaseInspector, BaseRedactor
from shredder.engine.classifier import classify
from shredder.engine.exceptions import UnsupportedFileTypeError
from shredder.engine.models import FileBuffer, FileCategory, Finding, Narrator, RedactedBlob, silent
from shredder.image.heic import HeicConverter
from shredder.image.inspector import ImageInspector
from shredder.image.metadata import ImageMetadataReader
from shredder.image.redactor import ImageRedactor
from shredder.logging.logger import Log
from shredder.pdf.factory import PdfInfoReaderFactory
from shredder.pdf.inspector import DocumentInspector
from shredder.pdf.redactor import Clock, DocumentRedactor, utc_now
from shredder.text.inspector import TextInspector
from shredder.text.redactor import TextRedactor


class Shredder:
    """Entry point of the inspection-and-redaction engine.

    Flow: classify -> inspect (for review) -> redact (on confirmation).
    Inspection and redaction are independent computations over the original
    buffer; the engine keeps no state between calls.
    """

    def __init__(
        self,
        *,
        image_inspector: BaseInspector,
        document_inspector: BaseInspector,
        text_inspector: BaseInspector,
        image_redactor: BaseRedactor,
        document_redactor: BaseRedactor,
        text_redactor: BaseRedactor,
    ) -> None:
        self._image_inspector = image_inspector
        self._document_inspector = document_inspector
        self._text_inspector = text_inspector
        self._image_redactor = image_redactor
        self._document_redactor = document_redactor
        self._text_redactor = text_redactor

    def classify(self, declared_type: str, file_name: str) -> FileCategory:
        return classify(declared_type, file_name)

    def inspect(
        self,
        file: FileBuffer,
        category: FileCategory,
        narrate: Narrator = silent,
    ) -> list[Finding]:
        """Return findings for *file*, highest risk first.

        Unsupported files are expected to be rejected by the caller; they
        yield an empty list.

        Raises:
            DecodeError: if the format decoder cannot parse the buffer.
        """
        if category is FileCategory.UNSUPPORTED:
            Log.warning(f"Inspection skipped for unsupported file {file.name}")
            return []
        narrate(f"[PROCESS] INSPECTING_{category.value.upper()}_STREAM...")
        Log.info(f"Inspecting {file.name} ({file.size} bytes) as {category.value}")
        findings = self._inspector_for(category).inspect(file, narrate)
        Log.info(f"Inspection of {file.name} finished: {len(findings)} findings")
        return findings

    def redact(
        self,
        file: FileBuffer,
        category: FileCategory,
        narrate: Narrator = silent,
    ) -> RedactedBlob:
        """Return a sanitized replacement for *file*.

        Raises:
            UnsupportedFileTypeError: if *category* is unsupported.
            DecodeError: if the input cannot be decoded.
            EncodeError: if the output cannot be serialized.
        """
        if category is FileCategory.UNSUPPORTED:
            raise UnsupportedFileTypeError(f"Cannot redact unsupported file '{file.name}'")
        narrate("[ACTION] INITIATING_SHRED_SEQUENCE...")
        Log.info(f"Redacting {file.name} ({file.size} bytes) as {category.value}")
        blob = self._redactor_for(category).redact(file, narrate)
        Log.info(f"Redaction of {file.name} finished: {len(blob.data)} bytes {blob.mime_type}")
        return blob

    def _inspector_for(self, category: FileCategory) -> BaseInspector:
        match category:
            case FileCategory.IMAGE:
                return self._image_inspector
            case FileCategory.DOCUMENT:
                return self._document_inspector
            case FileCategory.TEXT:
                return self._text_inspector
            case FileCategory.UNSUPPORTED:
                raise UnsupportedFileTypeError("Unsupported files have no inspector")
        raise ValueError(f"Unknown file category: {category!r}")

    def _redactor_for(self, category: FileCategory) -> BaseRedactor:
        match category:
            case FileCategory.IMAGE:
                return self._image_redactor
            case FileCategory.DOCUMENT:
                return self._document_redactor
            case FileCategory.TEXT:
                return self._text_redactor
            case FileCategory.UNSUPPORTED:
                raise UnsupportedFileTypeError("Unsupported files have no redactor")
        raise ValueError(f"Unknown file category: {category!r}")


def build_shredder(
    settings: Settings,
    rng: np.random.Generator | None = None,
    clock: Clock = utc_now,
) -> Shredder:
    """Build a Shredder with all required adapters."""
    converter = HeicConverter()
    return Shredder(
        image_inspector=ImageInspector(
            converter,
            ImageMetadataReader(),
            quality=settings.image_quality,
            max_value_length=settings.display_value_max_length,
            blob_filter_length=settings.blob_filter_length,
        ),
        document_inspector=DocumentInspector(PdfInfoReaderFactory.create(settings)),
        text_inspector=TextInspector(),
        image_redactor=ImageRedactor(
            converter,
            quality=settings.image_quality,
            noise_probability=settings.noise_probability,
            noise_intensity=settings.noise_intensity,
            rng=rng,
        ),
        document_redactor=DocumentRedactor(clock=clock),
        text_redactor=TextRedactor(),
    )
