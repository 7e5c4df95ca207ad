"""Live capture and restart-time reporting built on the core snapshot codec."""

from __future__ import annotations

from .integration import (
    CrashReport,
    CrashReportSender,
    load_previous_context,
    process_pending_crash,
)
from .provider import CrashContextProvider

__all__ = [
    "CrashContextProvider",
    "CrashReport",
    "CrashReportSender",
    "load_previous_context",
    "process_pending_crash",
]
