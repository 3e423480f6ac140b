"""Ingested document metadata."""

from dataclasses import dataclass, field
from datetime import datetime


ALLOWED_EXTENSIONS = (".pdf", ".doc", ".docx")


@dataclass
class Document:
    """A document uploaded by a user and tagged with topics/skills."""

    user_id: str
    file_path: str
    file_url: str
    topics: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    uploaded_at: datetime | None = None
    id: int | None = None
