"""Restart path: attach the restored context to a pending crash report.

When the previous process crashed, the platform crash handler hands us a
`CrashReport` carrying the context bytes that were current at the time of the
crash. Before the report goes out, those bytes are decoded. A snapshot that
cannot be decoded (truncated, garbled, written by an incompatible build) is
reported in the log and replaced with `NO_CONTEXT`: the report is still sent,
just without app state.

Guarantee to senders: the ``context`` argument always decodes to a valid
`CrashContext`, or is exactly `NO_CONTEXT`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from crashctx.core.context import CrashContext
from crashctx.core.errors import format_path
from crashctx.core.settings import get_logger
from crashctx.core.snapshot import NO_CONTEXT, restore_snapshot
from crashctx.core.storage import ContextStore

logger = get_logger("crashctx.reporting")


@dataclass(frozen=True, slots=True)
class CrashReport:
    """Crash captured by the platform handler during the previous run."""

    date: datetime | None
    type: str
    message: str
    stack_trace: str
    context: bytes = NO_CONTEXT


class CrashReportSender(Protocol):
    def send(self, report: CrashReport, context: bytes) -> None: ...


def process_pending_crash(report: CrashReport, sender: CrashReportSender) -> CrashContext | None:
    """Decode the report's context and send the pair; return the context or None."""
    result = restore_snapshot(report.context)
    if result.is_err():
        error = result.unwrap_err()
        if report.context:
            logger.warning(
                "Crash report context could not be decoded at %s: %s",
                format_path(error.path),
                error.message,
            )
        sender.send(report, NO_CONTEXT)
        return None
    sender.send(report, report.context)
    return result.unwrap()


def load_previous_context(store: ContextStore) -> CrashContext | None:
    """One-shot start-up restore of the last stored snapshot."""
    data = store.load()
    if data is None:
        return None
    result = restore_snapshot(data)
    if result.is_err():
        logger.warning("Ignoring unreadable stored crash context: %s", result.unwrap_err())
        return None
    return result.unwrap()


__all__ = ["CrashReport", "CrashReportSender", "load_previous_context", "process_pending_crash"]
