"""Helpers shared by every inspector: value rendering, status rows, ordering."""

import json
from collections.abc import Iterable
from datetime import date, datetime

from shredder.engine.models import Finding, RiskLevel

STATUS_KEY = "STATUS"
NO_METADATA_FOUND = "NO_METADATA_FOUND"
CLEAN = "CLEAN"

ELLIPSIS = "..."


def to_display_value(value: object, max_length: int = 50) -> str:
    """Render a decoded metadata value as a display string.

    Dates become ISO-8601, structured values (mappings, sequences, raw
    bytes) become JSON truncated to ``max_length`` characters.
    """
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple, bytes, bytearray)):
        rendered = json.dumps(value, default=_json_default, ensure_ascii=False)
        return truncate(rendered, max_length)
    return str(value)


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def clean_status(value: str = NO_METADATA_FOUND) -> Finding:
    """Synthetic finding reported when nothing sensitive was discovered."""
    return Finding(key=STATUS_KEY, display_value=value, risk_level=RiskLevel.NONE)


def sort_by_risk(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings by descending risk; ties keep encounter order."""
    return sorted(findings, key=lambda finding: -finding.risk_level.ordinal)


def _json_default(obj: object) -> object:
    if isinstance(obj, (bytes, bytearray)):
        return list(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, tuple):
        return list(obj)
    try:
        return float(obj)  # type: ignore[arg-type]
    except (TypeError, ValueError, ZeroDivisionError):
        return str(obj)
