"""Self-describing values: a closed tagged union over JSON-compatible shapes.

Callers attach arbitrary attributes to view events and user info. Those values
have no fixed schema, so before they enter a snapshot they are walked into one
of seven variants:

=====================  ==============================================
Variant                Holds
=====================  ==============================================
`BoolValue`            ``True`` / ``False``
`UnsignedIntegerValue` ``0 <= n <= 2**64 - 1``
`SignedIntegerValue`   ``-2**63 <= n < 0`` (non-negatives are unsigned)
`FloatValue`           any finite float
`TextValue`            ``str``
`SequenceValue`        ordered tuple of values
`MappingValue`         ``str`` keys to values
=====================  ==============================================

The conversion (`wrap`) happens eagerly at the boundary where a caller hands a
value in, so the rest of the system never needs to inspect arbitrary Python
objects. Unsupported inputs fail fast with `ValueNotSerializable`.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel

from .errors import ValueNotSerializable

UINT64_MAX = 2**64 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Containers nested deeper than this are rejected on both encode and decode.
MAX_NESTING_DEPTH = 64


class ValueKind(StrEnum):
    """Discriminator reported by every self-describing value."""

    BOOL = "bool"
    UNSIGNED_INTEGER = "uint"
    SIGNED_INTEGER = "int"
    FLOAT = "float"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class SelfDescribingValue:
    """Common base of the seven variants; never instantiated directly."""

    __slots__ = ()
    kind: ClassVar[ValueKind]


@dataclass(frozen=True, slots=True)
class BoolValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.BOOL
    value: bool


@dataclass(frozen=True, slots=True)
class UnsignedIntegerValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.UNSIGNED_INTEGER
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= UINT64_MAX:
            raise ValueError(f"{self.value} is outside the unsigned 64-bit range")


@dataclass(frozen=True, slots=True)
class SignedIntegerValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.SIGNED_INTEGER
    value: int

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} is outside the signed 64-bit range")


@dataclass(frozen=True, slots=True)
class FloatValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.FLOAT
    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise ValueError("non-finite floats have no JSON representation")


@dataclass(frozen=True, slots=True)
class TextValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.TEXT
    value: str


@dataclass(frozen=True, slots=True)
class SequenceValue(SelfDescribingValue):
    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE
    items: tuple[SelfDescribingValue, ...] = ()


@dataclass(frozen=True, slots=True)
class MappingValue(SelfDescribingValue):
    """Mapping variant. ``entries`` is treated as read-only after construction."""

    kind: ClassVar[ValueKind] = ValueKind.MAPPING
    entries: dict[str, SelfDescribingValue] = dataclasses.field(default_factory=dict)


# ---- Boundary conversion ----------------------------------------------------


def wrap(obj: Any, path: Sequence[str | int] = ()) -> SelfDescribingValue:
    """Structurally walk ``obj`` into a :class:`SelfDescribingValue`.

    Accepted inputs: ``bool``, 64-bit ``int``, finite ``float``, ``str``,
    ``list``/``tuple``, mappings with ``str`` keys, ``Enum`` members (their
    value), pydantic models and dataclass instances (``None`` fields skipped).
    Values that already are self-describing pass through unchanged.

    Raises
    ------
    ValueNotSerializable
        For anything else, including cyclic containers and values nested
        deeper than `MAX_NESTING_DEPTH`. ``path`` is used as the prefix of
        the reported location.
    """
    try:
        return _walk(obj, tuple(path), set(), 0)
    except RecursionError:
        raise ValueNotSerializable(obj, path, "nesting too deep") from None


def _walk(
    obj: Any, path: tuple[str | int, ...], active: set[int], depth: int
) -> SelfDescribingValue:
    if isinstance(obj, SelfDescribingValue):
        return obj
    if depth > MAX_NESTING_DEPTH:
        raise ValueNotSerializable(obj, path, "nesting too deep")
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, Enum):
        return _walk(obj.value, path, active, depth)
    if isinstance(obj, int):
        if 0 <= obj <= UINT64_MAX:
            return UnsignedIntegerValue(obj)
        if INT64_MIN <= obj < 0:
            return SignedIntegerValue(obj)
        raise ValueNotSerializable(obj, path, "integer outside the 64-bit range")
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueNotSerializable(obj, path, "non-finite float")
        return FloatValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, BaseModel):
        with _entered(obj, path, active):
            try:
                dumped = obj.model_dump(mode="json", exclude_none=True)
            except (ValueError, TypeError) as exc:
                raise ValueNotSerializable(obj, path, str(exc)) from exc
            return _walk(dumped, path, active, depth)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        with _entered(obj, path, active):
            fields = {
                f.name: getattr(obj, f.name)
                for f in dataclasses.fields(obj)
                if getattr(obj, f.name) is not None
            }
            return _walk(fields, path, active, depth)
    if isinstance(obj, Mapping):
        with _entered(obj, path, active):
            entries: dict[str, SelfDescribingValue] = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise ValueNotSerializable(key, path, "mapping keys must be strings")
                entries[key] = _walk(item, (*path, key), active, depth + 1)
            return MappingValue(entries)
    if isinstance(obj, list | tuple):
        with _entered(obj, path, active):
            return SequenceValue(
                tuple(
                    _walk(item, (*path, i), active, depth + 1) for i, item in enumerate(obj)
                )
            )
    raise ValueNotSerializable(obj, path)


@contextmanager
def _entered(obj: object, path: tuple[str | int, ...], active: set[int]) -> Iterator[None]:
    """Track containers on the current walk stack to detect cycles."""
    key = id(obj)
    if key in active:
        raise ValueNotSerializable(obj, path, "cyclic structure")
    active.add(key)
    try:
        yield
    finally:
        active.discard(key)


def unwrap(value: SelfDescribingValue) -> Any:
    """Return plain Python data (``bool``/``int``/``float``/``str``/``list``/``dict``)."""
    if isinstance(value, BoolValue | UnsignedIntegerValue | SignedIntegerValue):
        return value.value
    if isinstance(value, FloatValue | TextValue):
        return value.value
    if isinstance(value, SequenceValue):
        return [unwrap(item) for item in value.items]
    if isinstance(value, MappingValue):
        return {key: unwrap(item) for key, item in value.entries.items()}
    raise TypeError(f"not a self-describing value: {value!r}")


__all__ = [
    "BoolValue",
    "FloatValue",
    "INT64_MAX",
    "INT64_MIN",
    "MAX_NESTING_DEPTH",
    "MappingValue",
    "SelfDescribingValue",
    "SequenceValue",
    "SignedIntegerValue",
    "TextValue",
    "UINT64_MAX",
    "UnsignedIntegerValue",
    "ValueKind",
    "unwrap",
    "wrap",
]
