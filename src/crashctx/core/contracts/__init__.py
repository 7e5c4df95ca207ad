"""Domain contracts tracked by the crash context.

These are the mutable, collaborator-owned types the rest of an SDK works with.
Snapshots never store them directly: the bridges in `crashctx.core.bridges`
copy them into wire-stable records first.
"""

from __future__ import annotations

from .consent import TrackingConsent
from .network import Interface, NetworkConnectionInfo, Reachability
from .user_info import UserInfo
from .view_event import ViewEvent, ViewEventModel

__all__ = [
    "Interface",
    "NetworkConnectionInfo",
    "Reachability",
    "TrackingConsent",
    "UserInfo",
    "ViewEvent",
    "ViewEventModel",
]
