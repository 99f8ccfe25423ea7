import math

_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: int, decimals: int = 2) -> str:
    """Human-readable size using 1024-based units, trailing zeros dropped."""
    if size == 0:
        return "0 Bytes"
    decimals = max(decimals, 0)
    exponent = min(int(math.floor(math.log(size, 1024))), len(_UNITS) - 1)
    text = f"{size / 1024**exponent:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[exponent]}"
