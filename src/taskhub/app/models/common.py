"""Shared document base and helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from beanie import Document
from pydantic import Field


def utcnow() -> datetime:
    """Return a timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class TimestampedDocument(Document):
    """Document base carrying ``created_at``/``updated_at``."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or utcnow()


__all__ = ["TimestampedDocument", "utcnow"]
