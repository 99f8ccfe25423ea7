from unittest.mock import MagicMock

import pytest

from shredder.engine.base import BaseInspector, BaseRedactor
from shredder.engine.engine import Shredder
from shredder.engine.exceptions import DecodeError, UnsupportedFileTypeError
from shredder.engine.models import (
    FileBuffer,
    FileCategory,
    Finding,
    RedactedBlob,
    RiskLevel,
    silent,
)

_INSPECTORS = ("image_inspector", "document_inspector", "text_inspector")
_REDACTORS = ("image_redactor", "document_redactor", "text_redactor")


def _make_file(name: str = "notes.txt", mime_type: str = "text/plain") -> FileBuffer:
    return FileBuffer(name=name, mime_type=mime_type, data=b"payload")


def _make_shredder() -> tuple[Shredder, dict[str, MagicMock]]:
    mocks = {
        "image_inspector": MagicMock(spec=BaseInspector),
        "document_inspector": MagicMock(spec=BaseInspector),
        "text_inspector": MagicMock(spec=BaseInspector),
        "image_redactor": MagicMock(spec=BaseRedactor),
        "document_redactor": MagicMock(spec=BaseRedactor),
        "text_redactor": MagicMock(spec=BaseRedactor),
    }
    return Shredder(**mocks), mocks


class TestClassify:
    def test_delegates_to_classifier(self) -> None:
        shredder, _ = _make_shredder()
        assert shredder.classify("application/pdf", "a.pdf") is FileCategory.DOCUMENT
        assert shredder.classify("", "IMG.HEIC") is FileCategory.IMAGE
        assert shredder.classify("application/zip", "a.zip") is FileCategory.UNSUPPORTED


class TestInspectDispatch:
    @pytest.mark.parametrize(
        ("category", "inspector"),
        [
            (FileCategory.IMAGE, "image_inspector"),
            (FileCategory.DOCUMENT, "document_inspector"),
            (FileCategory.TEXT, "text_inspector"),
        ],
    )
    def test_routes_to_matching_inspector(self, category: FileCategory, inspector: str) -> None:
        shredder, mocks = _make_shredder()
        expected = [Finding("Make", "Apple", RiskLevel.MEDIUM)]
        mocks[inspector].inspect.return_value = expected
        file = _make_file()
        narrate = MagicMock()

        result = shredder.inspect(file, category, narrate)

        assert result == expected
        mocks[inspector].inspect.assert_called_once_with(file, narrate)
        for name, mock in mocks.items():
            if name.endswith("_inspector") and name != inspector:
                mock.inspect.assert_not_called()

    def test_narrates_stream_kind(self) -> None:
        shredder, mocks = _make_shredder()
        mocks["document_inspector"].inspect.return_value = []
        narrate = MagicMock()
        shredder.inspect(_make_file("a.pdf", "application/pdf"), FileCategory.DOCUMENT, narrate)
        narrate.assert_any_call("[PROCESS] INSPECTING_DOCUMENT_STREAM...")

    def test_unsupported_yields_empty_list(self) -> None:
        shredder, mocks = _make_shredder()
        narrate = MagicMock()
        assert shredder.inspect(_make_file("a.zip", ""), FileCategory.UNSUPPORTED, narrate) == []
        narrate.assert_not_called()
        for name in _INSPECTORS:
            mocks[name].inspect.assert_not_called()

    def test_decode_error_propagates(self) -> None:
        shredder, mocks = _make_shredder()
        mocks["image_inspector"].inspect.side_effect = DecodeError("broken")
        with pytest.raises(DecodeError):
            shredder.inspect(_make_file("a.jpg", "image/jpeg"), FileCategory.IMAGE)


class TestRedactDispatch:
    @pytest.mark.parametrize(
        ("category", "redactor"),
        [
            (FileCategory.IMAGE, "image_redactor"),
            (FileCategory.DOCUMENT, "document_redactor"),
            (FileCategory.TEXT, "text_redactor"),
        ],
    )
    def test_routes_to_matching_redactor(self, category: FileCategory, redactor: str) -> None:
        shredder, mocks = _make_shredder()
        blob = RedactedBlob(data=b"clean", mime_type="text/plain")
        mocks[redactor].redact.return_value = blob
        narrate = MagicMock()

        assert shredder.redact(_make_file(), category, narrate) is blob
        narrate.assert_any_call("[ACTION] INITIATING_SHRED_SEQUENCE...")

    def test_unsupported_raises(self) -> None:
        shredder, mocks = _make_shredder()
        with pytest.raises(UnsupportedFileTypeError, match="a.zip"):
            shredder.redact(_make_file("a.zip", ""), FileCategory.UNSUPPORTED)
        for name in _REDACTORS:
            mocks[name].redact.assert_not_called()

    def test_does_not_touch_inspectors(self) -> None:
        shredder, mocks = _make_shredder()
        mocks["text_redactor"].redact.return_value = RedactedBlob(b"", "text/plain")
        shredder.redact(_make_file(), FileCategory.TEXT)
        mocks["text_inspector"].inspect.assert_not_called()


class TestNarrationDoesNotChangeFindings:
    @pytest.mark.parametrize(
        ("name", "mime_type", "fixture", "category"),
        [
            ("trip.jpg", "image/jpeg", "jpeg_with_exif_bytes", FileCategory.IMAGE),
            ("plan.pdf", "application/pdf", "sample_pdf_bytes", FileCategory.DOCUMENT),
            ("server.log", "", None, FileCategory.TEXT),
        ],
    )
    def test_silent_and_recording_narrators_agree(
        self,
        request: pytest.FixtureRequest,
        shredder: Shredder,
        name: str,
        mime_type: str,
        fixture: str | None,
        category: FileCategory,
    ) -> None:
        if fixture is None:
            data = b"login from 10.1.2.3 by ops@example.com token=abcdefghijkl\n"
        else:
            data = request.getfixturevalue(fixture)
        file = FileBuffer(name=name, mime_type=mime_type, data=data)
        recorder = MagicMock()

        quiet = shredder.inspect(file, category, silent)
        narrated = shredder.inspect(file, category, recorder)

        assert quiet == narrated
        assert recorder.call_count > 0
