import re

from shredder.engine.models import FileCategory

_IMAGE_TYPE_RE = re.compile(r"image.*")
_HEIC_SUFFIXES = (".heic", ".HEIC")
_TEXT_TYPES = frozenset({"text/plain", "application/json"})
_TEXT_SUFFIXES = (".log", ".json", ".txt", ".sql", ".env")


def classify(declared_type: str, file_name: str) -> FileCategory:
    """Map a declared media type and file name to a processing category.

    Rules are evaluated in order and the first match wins. Never raises.
    """
    declared_type = declared_type or ""
    file_name = file_name or ""

    if _IMAGE_TYPE_RE.search(declared_type) or file_name.endswith(_HEIC_SUFFIXES):
        return FileCategory.IMAGE
    if declared_type == "application/pdf":
        return FileCategory.DOCUMENT
    if declared_type in _TEXT_TYPES or file_name.endswith(_TEXT_SUFFIXES):
        return FileCategory.TEXT
    return FileCategory.UNSUPPORTED


def is_heic(file_name: str) -> bool:
    """True when the name carries a HEIC suffix in any letter case."""
    return (file_name or "").lower().endswith(".heic")
