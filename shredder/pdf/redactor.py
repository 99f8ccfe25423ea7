from collections.abc import Callable
from datetime import datetime, timezone

import pymupdf

from shredder.engine.base import BaseRedactor
from shredder.engine.exceptions import DecodeError, EncodeError
from shredder.engine.models import FileBuffer, Narrator, RedactedBlob
from shredder.logging.logger import Log
from shredder.pdf.dates import format_pdf_date

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentRedactor(BaseRedactor):
    """Blanks the info dictionary and restamps both timestamps.

    Page content is left untouched; only the info dictionary and the XMP
    metadata stream are rewritten.
    """

    MIME_TYPE = "application/pdf"

    _BLANKED_KEYS = ("Title", "Author", "Subject", "Keywords", "Creator", "Producer")

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock

    def redact(self, file: FileBuffer, narrate: Narrator) -> RedactedBlob:
        try:
            doc = pymupdf.open(stream=file.data, filetype="pdf")  # type: ignore[no-untyped-call]
        except Exception as exc:
            raise DecodeError(f"pymupdf could not open document: {exc}") from exc

        stamp = format_pdf_date(self._clock())
        try:
            with doc:
                doc.set_metadata({"creationDate": stamp, "modDate": stamp})
                self._blank_info_strings(doc)
                doc.del_xml_metadata()
                narrate("[ACTION] CLEARING_INFO_DICTIONARY...")
                output = doc.tobytes()
        except Exception as exc:
            raise EncodeError(f"pymupdf could not rewrite document: {exc}") from exc

        Log.info(f"Document metadata cleared, timestamps set to {stamp}")
        return RedactedBlob(data=output, mime_type=self.MIME_TYPE)

    def _blank_info_strings(self, doc: pymupdf.Document) -> None:
        # set_metadata writes null for empty values; fields must read back as "".
        kind, value = doc.xref_get_key(-1, "Info")
        if kind != "xref":
            raise EncodeError("Document has no info dictionary")
        info_xref = int(value.split()[0])
        for key in self._BLANKED_KEYS:
            doc.xref_set_key(info_xref, key, "()")
