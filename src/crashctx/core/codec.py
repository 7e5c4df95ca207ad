"""Value codec: self-describing values <-> JSON wire form.

Decoding uses an *ordered type probe*. JSON does not distinguish integer
subtypes at the syntax level, so each raw token is tried against the variants
in a fixed order and the first lossless interpretation wins:

1. Boolean          (``true``/``false`` are never coerced to 0/1)
2. Unsigned integer (integer literal in ``[0, 2**64)``)
3. Signed integer   (negative integer literal in ``[-2**63, 0)``)
4. Floating point   (literal with a fraction/exponent, or out of integer range)
5. Text
6. Sequence         (recurse)
7. Mapping          (recurse)

JSON ``null`` matches nothing and raises `UnrecognizedValueShape`.

Byte level
----------
`dumps` writes compact UTF-8 JSON with sorted keys so that equal snapshots are
byte-identical. Python's encoder already writes integers without a decimal
point and floats with one (``7.0``), which is what keeps
``encode(decode(encode(v))) == encode(v)``. `dumps` either returns the whole
buffer or raises; it never produces partial output.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import MalformedWireFormat, UnrecognizedValueShape, ValueNotSerializable
from .values import (
    INT64_MIN,
    MAX_NESTING_DEPTH,
    UINT64_MAX,
    BoolValue,
    FloatValue,
    MappingValue,
    SelfDescribingValue,
    SequenceValue,
    SignedIntegerValue,
    TextValue,
    UnsignedIntegerValue,
)

# ---- Value level --------------------------------------------------------------


def encode_value(value: SelfDescribingValue) -> Any:
    """Return the JSON-ready Python form of ``value``."""
    return _encode(value, 0)


def _encode(value: SelfDescribingValue, depth: int) -> Any:
    if depth > MAX_NESTING_DEPTH:
        raise ValueNotSerializable(value, (), "nesting too deep")
    if isinstance(value, SequenceValue):
        return [_encode(item, depth + 1) for item in value.items]
    if isinstance(value, MappingValue):
        return {key: _encode(item, depth + 1) for key, item in value.entries.items()}
    if isinstance(value, FloatValue):
        return float(value.value)
    if isinstance(value, BoolValue | UnsignedIntegerValue | SignedIntegerValue | TextValue):
        return value.value
    raise ValueNotSerializable(value)


def decode_value(raw: Any, path: Sequence[str | int] = ()) -> SelfDescribingValue:
    """Decode one parsed JSON token into a value using the ordered type probe.

    Containers nested deeper than `MAX_NESTING_DEPTH` below ``raw`` are
    rejected with `UnrecognizedValueShape`, the same bound `wrap` applies.
    """
    where = tuple(path)
    try:
        return _decode(raw, where, 0)
    except RecursionError:
        raise UnrecognizedValueShape("nesting too deep", where) from None


def _decode(raw: Any, where: tuple[str | int, ...], depth: int) -> SelfDescribingValue:
    if depth > MAX_NESTING_DEPTH:
        raise UnrecognizedValueShape("nesting too deep", where)
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, int):
        if 0 <= raw <= UINT64_MAX:
            return UnsignedIntegerValue(raw)
        if INT64_MIN <= raw < 0:
            return SignedIntegerValue(raw)
        return _as_float(raw, where)
    if isinstance(raw, float):
        return _as_float(raw, where)
    if isinstance(raw, str):
        return TextValue(raw)
    if isinstance(raw, list):
        return SequenceValue(
            tuple(_decode(item, (*where, i), depth + 1) for i, item in enumerate(raw))
        )
    if isinstance(raw, dict):
        return MappingValue(
            {key: _decode(item, (*where, key), depth + 1) for key, item in raw.items()}
        )
    raise UnrecognizedValueShape(
        f"{type(raw).__name__} is not a value type supported by crashctx", where
    )


def _as_float(raw: int | float, path: tuple[str | int, ...]) -> FloatValue:
    try:
        number = float(raw)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise UnrecognizedValueShape("number does not fit a 64-bit float", path)
    return FloatValue(number)


def encode_attributes(attributes: Mapping[str, SelfDescribingValue]) -> dict[str, Any]:
    """Encode an attribute map (name -> value) into its JSON-ready form."""
    return {name: encode_value(value) for name, value in attributes.items()}


def decode_attributes(raw: Any, path: Sequence[str | int] = ()) -> dict[str, SelfDescribingValue]:
    """Decode a JSON object of attributes; every entry goes through the probe."""
    where = tuple(path)
    if not isinstance(raw, dict):
        raise UnrecognizedValueShape("attributes must be a JSON object", where)
    return {name: decode_value(item, (*where, name)) for name, item in raw.items()}


# ---- Byte level -------------------------------------------------------------


def dumps(obj: Any) -> bytes:
    """Serialize JSON-ready data to compact, key-sorted UTF-8 bytes."""
    try:
        text = json.dumps(
            obj,
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=True,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise ValueNotSerializable(obj, (), str(exc)) from exc
    return text.encode("utf-8")


def loads(data: bytes) -> Any:
    """Parse snapshot bytes; any structural problem is `MalformedWireFormat`."""
    if not data:
        raise MalformedWireFormat("snapshot is empty")
    try:
        return json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError as exc:
        raise MalformedWireFormat(f"snapshot is not valid UTF-8: {exc.reason}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedWireFormat(
            f"snapshot is not valid JSON: {exc.msg} at offset {exc.pos}"
        ) from exc
    except (ValueError, RecursionError) as exc:
        # int digit limits, absurd nesting
        raise MalformedWireFormat(f"snapshot could not be parsed: {exc}") from exc


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"{name} is not allowed", name, 0)


def encode(value: SelfDescribingValue) -> bytes:
    """Encode a single value to bytes."""
    return dumps(encode_value(value))


def decode(data: bytes) -> SelfDescribingValue:
    """Decode bytes holding a single value."""
    return decode_value(loads(data))


__all__ = [
    "decode",
    "decode_attributes",
    "decode_value",
    "dumps",
    "encode",
    "encode_attributes",
    "encode_value",
    "loads",
]
