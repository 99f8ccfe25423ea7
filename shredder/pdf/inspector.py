from shredder.engine.base import BaseInspector
from shredder.engine.findings import clean_status, sort_by_risk, to_display_value
from shredder.engine.models import FileBuffer, Finding, Narrator, RiskLevel
from shredder.logging.logger import Log
from shredder.pdf.base import BasePdfInfoReader

_MEDIUM_RISK_KEYS = frozenset({"Author", "Creator", "Producer"})


class DocumentInspector(BaseInspector):
    """Reports every present info-dictionary field of a PDF."""

    def __init__(self, reader: BasePdfInfoReader) -> None:
        self._reader = reader

    def inspect(self, file: FileBuffer, narrate: Narrator) -> list[Finding]:
        info = self._reader.read(file.data)

        findings = [
            Finding(
                key=key,
                display_value=to_display_value(value),
                risk_level=RiskLevel.MEDIUM if key in _MEDIUM_RISK_KEYS else RiskLevel.LOW,
            )
            for key, value in info.fields()
        ]
        Log.info(f"Document info dictionary: {len(findings)} fields present")

        if not findings:
            return [clean_status()]
        return sort_by_risk(findings)
