"""Snapshot entry points exposed to collaborators.

- `build_snapshot(...) -> bytes` runs on the live path, right after every
  state change. It must never take the host application down, so any failure
  is logged and degrades to `NO_CONTEXT`. Individual attributes that cannot be
  serialized are dropped earlier, by the bridges, and do not reach this point.
- `restore_snapshot(data) -> Result[CrashContext, DecodeError]` runs once at
  start-up, off the critical path. Failures are returned, not raised.
"""

from __future__ import annotations

from typing import Final

from .context import CrashContext
from .contracts import NetworkConnectionInfo, TrackingConsent, UserInfo, ViewEvent
from .errors import CrashContextError, DecodeError, MalformedWireFormat
from .result import Result, err, ok
from .settings import get_logger

NO_CONTEXT: Final[bytes] = b""
"""Sentinel bytes meaning "no context available"."""

logger = get_logger("crashctx.snapshot")


def encode_context(context: CrashContext) -> bytes:
    """Encode ``context``; returns `NO_CONTEXT` instead of raising."""
    try:
        return context.to_bytes()
    except CrashContextError as exc:
        logger.error("Failed to encode crash context, storing no context: %s", exc)
        return NO_CONTEXT


def build_snapshot(
    consent: TrackingConsent,
    view_event: ViewEvent | None = None,
    user_info: UserInfo | None = None,
    network_info: NetworkConnectionInfo | None = None,
) -> bytes:
    """Build a context from current domain values and encode it."""
    try:
        context = CrashContext.build(consent, view_event, user_info, network_info)
    except (CrashContextError, ValueError) as exc:
        logger.error("Failed to build crash context, storing no context: %s", exc)
        return NO_CONTEXT
    return encode_context(context)


def restore_snapshot(data: bytes | None) -> Result[CrashContext, DecodeError]:
    """Decode snapshot bytes written by a previous process."""
    if not data:
        return err(MalformedWireFormat("no context was stored"))
    try:
        return ok(CrashContext.from_bytes(data))
    except DecodeError as exc:
        return err(exc)


__all__ = ["NO_CONTEXT", "build_snapshot", "encode_context", "restore_snapshot"]
