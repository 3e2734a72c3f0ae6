"""Base model and wire serializer shared by requests, responses and entities."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..utils import to_json_bytes


class MochowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Render the model with service field names, omitting unset or empty values.

        Only declared fields are pruned; user maps such as rows or primary keys
        are copied as given.
        """
        payload: Dict[str, Any] = {}
        for name, info in type(self).model_fields.items():
            if info.exclude:
                continue
            value = getattr(self, name)
            if _is_empty(value):
                continue
            payload[info.alias or name] = _render(value)
        return payload

    def to_json(self) -> bytes:
        return to_json_bytes(self.to_payload())


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value) == 0
    return False


def _render(value: Any) -> Any:
    if isinstance(value, MochowModel):
        return value.to_payload()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set)):
        return [_render(item) for item in value]
    if isinstance(value, dict):
        return {key: _render(item) for key, item in value.items()}
    return value


__all__ = ["MochowModel"]
