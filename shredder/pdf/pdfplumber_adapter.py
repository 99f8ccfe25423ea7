import io

import pdfplumber

from shredder.engine.exceptions import DecodeError
from shredder.pdf.base import BasePdfInfoReader
from shredder.pdf.dates import parse_pdf_date
from shredder.pdf.models import DocumentInfo


class PdfPlumberInfoReader(BasePdfInfoReader):
    """Reads the info dictionary using pdfplumber."""

    def read(self, pdf_bytes: bytes) -> DocumentInfo:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                meta = dict(pdf.metadata or {})
                page_count = len(pdf.pages)
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"pdfplumber could not read document: {exc}") from exc

        return DocumentInfo(
            page_count=page_count,
            title=_text(meta.get("Title")),
            author=_text(meta.get("Author")),
            subject=_text(meta.get("Subject")),
            creator=_text(meta.get("Creator")),
            producer=_text(meta.get("Producer")),
            keywords=_text(meta.get("Keywords")),
            creation_date=parse_pdf_date(_text(meta.get("CreationDate"))),
            modification_date=parse_pdf_date(_text(meta.get("ModDate"))),
        )


def _text(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value)
    return text or None
