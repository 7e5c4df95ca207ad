"""Shared helpers for the wire records: three-state fields and attribute maps.

Three-state fields
------------------
Several wire keys distinguish "key absent" from "key present with ``null``".
A decoded record keeps that distinction (``ABSENT`` vs ``None``) so it
re-encodes to exactly the bytes it was read from. Both states map to ``None``
on the domain side.

Attribute policy
----------------
`wrap_attributes` drops any attribute whose value raises
`ValueNotSerializable`, logs a warning naming it, and keeps the rest. A bad
attribute therefore costs one entry, never the whole snapshot.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final, TypeVar

from ..codec import decode_attributes
from ..errors import UnrecognizedValueShape, ValueNotSerializable
from ..settings import get_logger
from ..values import SelfDescribingValue, wrap

T = TypeVar("T")

logger = get_logger("crashctx.bridges")


class _Absent:
    """Marker for a wire key that is not present at all."""

    __slots__ = ()
    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()

Tristate = T | None | _Absent


def require_object(raw: Any, path: Sequence[str | int]) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise UnrecognizedValueShape("expected a JSON object", path)
    return raw


def read_optional(
    raw: Mapping[str, Any], key: str, expected: type, path: Sequence[str | int]
) -> Any:
    """Read ``key`` as ``ABSENT``, ``None`` or a value of type ``expected``."""
    if key not in raw:
        return ABSENT
    value = raw[key]
    if value is None:
        return None
    # bool is an int subclass; keep the two apart
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise UnrecognizedValueShape(f"expected {expected.__name__}", (*path, key))
    return value


def write_optional(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not ABSENT:
        out[key] = value


def domain_optional(value: Tristate[T]) -> T | None:
    return None if value is ABSENT else value  # type: ignore[return-value]


def wrap_attributes(
    attributes: Mapping[str, Any], path: Sequence[str | int]
) -> dict[str, SelfDescribingValue]:
    """Convert caller attributes into self-describing values, dropping bad ones."""
    out: dict[str, SelfDescribingValue] = {}
    for name, value in attributes.items():
        try:
            out[name] = wrap(value, (*path, name))
        except ValueNotSerializable as exc:
            logger.warning("Dropping attribute %r from snapshot: %s", name, exc)
    return out


def read_attributes(
    raw: Mapping[str, Any], key: str, path: Sequence[str | int]
) -> dict[str, SelfDescribingValue]:
    """Decode an attribute map; a missing key reads as an empty map."""
    if key not in raw:
        return {}
    return decode_attributes(raw[key], (*path, key))


__all__ = [
    "ABSENT",
    "Tristate",
    "domain_optional",
    "read_attributes",
    "read_optional",
    "require_object",
    "wrap_attributes",
    "write_optional",
]
