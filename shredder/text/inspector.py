from shredder.engine.base import BaseInspector
from shredder.engine.findings import CLEAN, clean_status, sort_by_risk, truncate
from shredder.engine.models import FileBuffer, Finding, Narrator, RiskLevel
from shredder.engine.patterns import DETECTION_PATTERNS, DetectionPattern
from shredder.logging.logger import Log

_NARRATED_MATCHES = 3
_EXCERPT_LENGTH = 20


def decode_text(data: bytes) -> str:
    """Decode a buffer as UTF-8, replacing malformed sequences."""
    return data.decode("utf-8", errors="replace")


class TextInspector(BaseInspector):
    """Scans decoded text with the detection pattern table."""

    def __init__(
        self,
        patterns: tuple[DetectionPattern, ...] = DETECTION_PATTERNS,
    ) -> None:
        self._patterns = patterns

    def inspect(self, file: FileBuffer, narrate: Narrator) -> list[Finding]:
        text = decode_text(file.data)
        findings: list[Finding] = []
        total = 0

        for detection in self._patterns:
            matches = [m.group(0) for m in detection.pattern.finditer(text)]
            if not matches:
                continue
            findings.append(
                Finding(
                    key=detection.label,
                    display_value=f"Found {len(matches)} instance(s)",
                    risk_level=RiskLevel.HIGH,
                )
            )
            total += len(matches)
            for match in matches[:_NARRATED_MATCHES]:
                excerpt = truncate(match, _EXCERPT_LENGTH)
                narrate(f"[RedFlag] SENSITIVE_DATA: {detection.label} -> {excerpt}")

        if not findings:
            narrate("[INFO] TEXT_ANALYSIS_COMPLETE: CLEAN")
            Log.debug(f"Text scan of {len(text)} chars found nothing")
            return [clean_status(CLEAN)]

        narrate(f"[ALERT] TEXT_ANALYSIS_COMPLETE: {total} ISSUES FOUND")
        Log.info(f"Text scan found {total} matches across {len(findings)} patterns")
        return sort_by_risk(findings)
