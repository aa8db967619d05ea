"""
Memory model for timeless application.

This module contains the Memory dataclass that represents a dated photo
memory, and the MemoryDraft used to create or replace one.
"""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from ..core.dates import normalize_date, parse_date


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored timestamp which can be None, string, or datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        text = value.replace("Z", "+00:00") if value.endswith("Z") else value
        return datetime.fromisoformat(text)
    return None


@dataclass
class MemoryDraft:
    """
    The mutable fields of a memory, as entered in the create or edit form.

    Image URLs must already be uploaded to the asset host.
    """

    title: str
    description: str
    date: date
    images: list[str] = field(default_factory=list)

    def to_record(self) -> dict:
        """Wire fields for the persistence collection."""
        return {
            "title": self.title,
            "description": self.description,
            "image_urls": list(self.images),
            "memory_date": self.date.isoformat(),
        }


@dataclass
class Memory:
    """
    A single memory in the timeline.

    ``date`` is when the memory happened, which is unrelated to the
    created/updated timestamps assigned on save.
    """

    id: str
    title: str
    description: str
    images: list[str]
    date: date
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def normalized_date(self) -> str:
        """``YYYY-MM-DD`` join key against the timeline ticks."""
        return normalize_date(self.date)

    @classmethod
    def create_new(cls, draft: MemoryDraft, created_at: datetime | None = None) -> "Memory":
        """
        Create a new Memory from a draft with generated ID and current timestamp.

        Args:
            draft: Validated form values with uploaded image URLs
            created_at: Creation time (defaults to now)

        Returns:
            New Memory instance
        """
        now = created_at or datetime.now(UTC)
        return cls(
            id=str(uuid.uuid4()),
            title=draft.title,
            description=draft.description,
            images=list(draft.images),
            date=draft.date,
            created_at=now,
            updated_at=now,
        )

    def to_record(self) -> dict:
        """
        Convert Memory to the persistence wire shape.

        Returns:
            Dictionary with image_urls and memory_date fields
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_urls": list(self.images),
            "memory_date": self.normalized_date,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_record(cls, data: dict) -> "Memory":
        """
        Create Memory from a persistence record.

        Args:
            data: Dictionary with wire field names

        Returns:
            Memory instance
        """
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            images=list(data.get("image_urls") or []),
            date=parse_date(data["memory_date"]),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
        )
