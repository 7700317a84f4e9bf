"""Base model for GoCD API payloads."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, model_serializer, model_validator


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


class GoCDModel(BaseModel):
    """Base model with common behavior for all GoCD API models.

    Fields listed in ``omit_empty`` are left out of the serialized form while
    they hold their zero value. Every other field is always written.
    """

    model_config = {"extra": "ignore", "populate_by_name": True}

    omit_empty: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # GoCD sends null for unset lists and objects; fall back to defaults.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if k not in self.omit_empty or not _is_empty(v)}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        return self.model_dump_json()
