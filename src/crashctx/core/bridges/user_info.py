"""User-info bridge.

Wire shape (``lui``)::

    {"id": "u1", "nm": null, "em": null, "ei": {"plan": "pro"}}

Identity fields missing on the domain side are written as explicit ``null``.
When reading, an absent key and a ``null`` both mean "not set", but the record
remembers which one it saw.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..codec import encode_attributes
from ..contracts.user_info import UserInfo
from ..values import SelfDescribingValue
from .fields import (
    Tristate,
    domain_optional,
    read_attributes,
    read_optional,
    require_object,
    wrap_attributes,
    write_optional,
)

KEY_ID = "id"
KEY_NAME = "nm"
KEY_EMAIL = "em"
KEY_EXTRA_INFO = "ei"


@dataclass(frozen=True, slots=True)
class WireUserInfo:
    id: Tristate[str] = None
    name: Tristate[str] = None
    email: Tristate[str] = None
    extra_info: dict[str, SelfDescribingValue] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        write_optional(out, KEY_ID, self.id)
        write_optional(out, KEY_NAME, self.name)
        write_optional(out, KEY_EMAIL, self.email)
        out[KEY_EXTRA_INFO] = encode_attributes(self.extra_info)
        return out

    @classmethod
    def from_json(cls, raw: Any, path: Sequence[str | int] = ("lui",)) -> WireUserInfo:
        where = tuple(path)
        obj = require_object(raw, where)
        return cls(
            id=read_optional(obj, KEY_ID, str, where),
            name=read_optional(obj, KEY_NAME, str, where),
            email=read_optional(obj, KEY_EMAIL, str, where),
            extra_info=read_attributes(obj, KEY_EXTRA_INFO, where),
        )


def to_wire(info: UserInfo, path: Sequence[str | int] = ("lui",)) -> WireUserInfo:
    return WireUserInfo(
        id=info.id,
        name=info.name,
        email=info.email,
        extra_info=wrap_attributes(info.extra_info, (*path, KEY_EXTRA_INFO)),
    )


def to_domain(wire: WireUserInfo) -> UserInfo:
    return UserInfo(
        id=domain_optional(wire.id),
        name=domain_optional(wire.name),
        email=domain_optional(wire.email),
        extra_info=dict(wire.extra_info),
    )


__all__ = ["WireUserInfo", "to_domain", "to_wire"]
