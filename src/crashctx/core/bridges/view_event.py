"""View-event bridge.

Wire shape (``lre``)::

    {"mdl": {...view event model...}, "att": {...}, "uia": {...}}

The model is written with its JSON aliases and without ``null`` fields, and
read back in strict mode, so ``"date": "123"`` or ``1.0`` is rejected. Both
attribute maps go through the value codec.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from ..codec import dumps, encode_attributes
from ..contracts.view_event import ViewEvent, ViewEventModel
from ..errors import UnrecognizedValueShape
from ..values import SelfDescribingValue
from .fields import read_attributes, require_object, wrap_attributes

KEY_MODEL = "mdl"
KEY_ATTRIBUTES = "att"
KEY_USER_INFO_ATTRIBUTES = "uia"


@dataclass(frozen=True, slots=True)
class WireViewEvent:
    model: ViewEventModel
    attributes: dict[str, SelfDescribingValue] = field(default_factory=dict)
    user_info_attributes: dict[str, SelfDescribingValue] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return {
            KEY_MODEL: self.model.model_dump(mode="json", by_alias=True, exclude_none=True),
            KEY_ATTRIBUTES: encode_attributes(self.attributes),
            KEY_USER_INFO_ATTRIBUTES: encode_attributes(self.user_info_attributes),
        }

    @classmethod
    def from_json(cls, raw: Any, path: Sequence[str | int] = ("lre",)) -> WireViewEvent:
        where = tuple(path)
        obj = require_object(raw, where)
        if KEY_MODEL not in obj:
            raise UnrecognizedValueShape("view event model is missing", (*where, KEY_MODEL))
        try:
            model = ViewEventModel.model_validate_json(dumps(obj[KEY_MODEL]), strict=True)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise UnrecognizedValueShape(
                f"invalid view event model: {first['msg']}",
                (*where, KEY_MODEL, *first["loc"]),
            ) from exc
        return cls(
            model=model,
            attributes=read_attributes(obj, KEY_ATTRIBUTES, where),
            user_info_attributes=read_attributes(obj, KEY_USER_INFO_ATTRIBUTES, where),
        )


def to_wire(event: ViewEvent, path: Sequence[str | int] = ("lre",)) -> WireViewEvent:
    return WireViewEvent(
        model=event.model.model_copy(deep=True),
        attributes=wrap_attributes(event.attributes, (*path, KEY_ATTRIBUTES)),
        user_info_attributes=wrap_attributes(
            event.user_info_attributes, (*path, KEY_USER_INFO_ATTRIBUTES)
        ),
    )


def to_domain(wire: WireViewEvent) -> ViewEvent:
    """Rebuild the view event; attribute values stay self-describing."""
    return ViewEvent(
        model=wire.model.model_copy(deep=True),
        attributes=dict(wire.attributes),
        user_info_attributes=dict(wire.user_info_attributes),
    )


__all__ = ["WireViewEvent", "to_domain", "to_wire"]
