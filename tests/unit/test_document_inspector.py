from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from shredder.engine.exceptions import DecodeError
from shredder.engine.models import FileBuffer, RiskLevel, silent
from shredder.pdf.base import BasePdfInfoReader
from shredder.pdf.inspector import DocumentInspector
from shredder.pdf.models import DocumentInfo
from shredder.pdf.pymupdf_adapter import PyMuPdfInfoReader


def _make_file(data: bytes = b"%PDF-1.4") -> FileBuffer:
    return FileBuffer(name="report.pdf", mime_type="application/pdf", data=data)


def _inspector_for(info: DocumentInfo) -> DocumentInspector:
    reader = MagicMock(spec=BasePdfInfoReader)
    reader.read.return_value = info
    return DocumentInspector(reader)


class TestDocumentInspectorRisk:
    def test_author_creator_producer_are_medium(self) -> None:
        info = DocumentInfo(
            page_count=1, author="Jane", creator="Writer", producer="Lib", title="Plan"
        )
        findings = _inspector_for(info).inspect(_make_file(), silent)
        risks = {f.key: f.risk_level for f in findings}
        assert risks["Author"] is RiskLevel.MEDIUM
        assert risks["Creator"] is RiskLevel.MEDIUM
        assert risks["Producer"] is RiskLevel.MEDIUM
        assert risks["Title"] is RiskLevel.LOW
        assert risks["PageCount"] is RiskLevel.LOW

    def test_sorted_medium_first_in_field_order(self) -> None:
        info = DocumentInfo(
            page_count=2, title="Plan", author="Jane", subject="S", producer="Lib"
        )
        findings = _inspector_for(info).inspect(_make_file(), silent)
        assert [f.key for f in findings] == ["Author", "Producer", "Title", "Subject", "PageCount"]

    def test_absent_fields_are_skipped(self) -> None:
        findings = _inspector_for(DocumentInfo(page_count=1)).inspect(_make_file(), silent)
        assert [f.key for f in findings] == ["PageCount"]
        assert findings[0].display_value == "1"

    def test_dates_render_iso8601(self) -> None:
        created = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)
        info = DocumentInfo(page_count=1, creation_date=created)
        findings = _inspector_for(info).inspect(_make_file(), silent)
        by_key = {f.key: f.display_value for f in findings}
        assert by_key["CreationDate"] == "2024-05-06T07:08:09+00:00"


class TestDocumentInspectorWithPdf:
    def test_reports_reportlab_metadata(self, sample_pdf_bytes: bytes) -> None:
        inspector = DocumentInspector(PyMuPdfInfoReader())
        findings = inspector.inspect(_make_file(sample_pdf_bytes), silent)
        by_key = {f.key: f for f in findings}
        assert by_key["Author"].display_value == "John Doe (CEO)"
        assert by_key["Author"].risk_level is RiskLevel.MEDIUM
        assert by_key["PageCount"].display_value == "1"
        assert findings[0].risk_level is RiskLevel.MEDIUM

    def test_invalid_pdf_raises_decode_error(self) -> None:
        inspector = DocumentInspector(PyMuPdfInfoReader())
        with pytest.raises(DecodeError):
            inspector.inspect(_make_file(b"garbage"), silent)
