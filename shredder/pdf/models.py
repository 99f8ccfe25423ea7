from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class DocumentInfo:
    """Info-dictionary fields of a PDF; None marks an absent field."""

    page_count: int
    title: str | None = None
    author: str | None = None
    subject: str | None = None
    creator: str | None = None
    producer: str | None = None
    keywords: str | None = None
    creation_date: datetime | None = None
    modification_date: datetime | None = None

    def fields(self) -> list[tuple[str, object]]:
        """Present fields in display order."""
        ordered: list[tuple[str, object | None]] = [
            ("Title", self.title),
            ("Author", self.author),
            ("Subject", self.subject),
            ("Creator", self.creator),
            ("Producer", self.producer),
            ("Keywords", self.keywords),
            ("CreationDate", self.creation_date),
            ("ModificationDate", self.modification_date),
            ("PageCount", self.page_count),
        ]
        return [(key, value) for key, value in ordered if value is not None]
