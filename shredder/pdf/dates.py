"""PDF date strings: ``D:YYYYMMDDHHmmSSOHH'mm'`` with every part after the year optional."""

import re
from datetime import datetime, timedelta, timezone

_PDF_DATE_RE = re.compile(
    r"^(?:D:)?(\d{4})(\d{2})?(\d{2})?(\d{2})?(\d{2})?(\d{2})?"
    r"(?:([+\-Z])(?:(\d{2})'?(?:(\d{2})'?)?)?)?"
)


def parse_pdf_date(raw: str | None) -> datetime | None:
    """Parse a PDF date string; returns None for empty or malformed input.

    Dates without an offset are read as UTC.
    """
    if not raw:
        return None
    match = _PDF_DATE_RE.match(raw.strip())
    if match is None:
        return None
    year, month, day, hour, minute, second, sign, off_h, off_m = match.groups()
    offset = timedelta(hours=int(off_h or 0), minutes=int(off_m or 0))
    if sign == "-":
        offset = -offset
    try:
        return datetime(
            int(year),
            int(month or 1),
            int(day or 1),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            tzinfo=timezone(offset),
        )
    except ValueError:
        return None


def format_pdf_date(value: datetime) -> str:
    """Format *value* as a PDF date string; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    offset = value.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"D:{value:%Y%m%d%H%M%S}{sign}{minutes // 60:02d}'{minutes % 60:02d}'"
