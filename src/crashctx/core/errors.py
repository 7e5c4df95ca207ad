"""Error hierarchy for encoding and decoding crash-context snapshots.

Encode-time
-----------
- `ValueNotSerializable`: a caller handed in something the value codec cannot
  represent (None, callables, NaN, cycles, non-string mapping keys, ...).

Decode-time (all subclasses of `DecodeError`)
---------------------------------------------
- `UnrecognizedValueShape`: wire content at a given path matches no known variant.
- `UnknownEnumValue`: an enum slot holds a value outside its fixed member set.
- `MalformedWireFormat`: the bytes are not a complete JSON document, e.g. a
  snapshot truncated by a crash in the middle of a write.

Every error carries the path (keys and indices) at which it happened.
"""

from __future__ import annotations

from collections.abc import Sequence

Path = tuple[str | int, ...]


def format_path(path: Sequence[str | int]) -> str:
    """Render ``("lre", "att", "tags", 2)`` as ``$.lre.att.tags[2]``."""
    out = "$"
    for part in path:
        out += f"[{part}]" if isinstance(part, int) else f".{part}"
    return out


class CrashContextError(Exception):
    """Base class for every error raised by crashctx."""

    def __init__(self, message: str, path: Sequence[str | int] = ()) -> None:
        self.path: Path = tuple(path)
        self.message = message
        super().__init__(f"{message} (at {format_path(self.path)})")


class ValueNotSerializable(CrashContextError):
    """Raised when an attribute value cannot be represented on the wire."""

    def __init__(self, value: object, path: Sequence[str | int] = (), reason: str = "") -> None:
        self.value_type = type(value).__name__
        detail = f": {reason}" if reason else ""
        super().__init__(f"value of type {self.value_type!r} is not serializable{detail}", path)


class DecodeError(CrashContextError):
    """Base class for failures while reading a snapshot back."""


class UnrecognizedValueShape(DecodeError):
    """Raised when wire content does not match any known variant."""


class UnknownEnumValue(DecodeError):
    """Raised when an enum slot holds an out-of-range value."""

    def __init__(self, enum_name: str, raw: object, path: Sequence[str | int] = ()) -> None:
        self.enum_name = enum_name
        self.raw = raw
        super().__init__(f"unknown {enum_name} value {raw!r}", path)


class MalformedWireFormat(DecodeError):
    """Raised when the snapshot bytes are not a valid JSON document."""


__all__ = [
    "CrashContextError",
    "DecodeError",
    "MalformedWireFormat",
    "Path",
    "UnknownEnumValue",
    "UnrecognizedValueShape",
    "ValueNotSerializable",
    "format_path",
]
