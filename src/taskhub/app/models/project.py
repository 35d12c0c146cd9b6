"""Project document."""

from __future__ import annotations

import re

from beanie import PydanticObjectId
from pydantic import Field

from .common import TimestampedDocument

DEFAULT_PROJECT_COLOR = "#808080"
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class Project(TimestampedDocument):
    """Named grouping of tasks owned by exactly one user."""

    user_id: PydanticObjectId
    name: str = Field(min_length=1, max_length=100)
    color: str = DEFAULT_PROJECT_COLOR
    is_favorite: bool = False

    class Settings:
        name = "projects"


__all__ = ["DEFAULT_PROJECT_COLOR", "HEX_COLOR_PATTERN", "Project"]
