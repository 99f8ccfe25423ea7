import pymupdf

from shredder.engine.exceptions import DecodeError
from shredder.pdf.base import BasePdfInfoReader
from shredder.pdf.dates import parse_pdf_date
from shredder.pdf.models import DocumentInfo


class PyMuPdfInfoReader(BasePdfInfoReader):
    """Reads the info dictionary using PyMuPDF."""

    def read(self, pdf_bytes: bytes) -> DocumentInfo:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                meta = doc.metadata or {}
                page_count = doc.page_count
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"pymupdf could not read document: {exc}") from exc

        return DocumentInfo(
            page_count=page_count,
            title=meta.get("title") or None,
            author=meta.get("author") or None,
            subject=meta.get("subject") or None,
            creator=meta.get("creator") or None,
            producer=meta.get("producer") or None,
            keywords=meta.get("keywords") or None,
            creation_date=parse_pdf_date(meta.get("creationDate")),
            modification_date=parse_pdf_date(meta.get("modDate")),
        )
