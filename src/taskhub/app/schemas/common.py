"""Base model and helpers shared by the public schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema serialised with camelCase keys; inputs accept either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def reject_explicit_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    """Raise when any of ``fields`` was sent, but sent as ``null``.

    Partial updates treat an absent key as "leave unchanged"; a ``null`` for a
    non-nullable attribute is a client mistake rather than a request to clear it.
    """
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            alias = to_camel(name)
            raise ValueError(f"{alias} cannot be null.")


__all__ = ["CamelModel", "reject_explicit_nulls", "strip_text"]
