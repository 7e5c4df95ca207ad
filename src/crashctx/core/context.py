"""CrashContext — the snapshot of tracked application state.

It is written continuously while the process runs and read back by the next
process after a crash, so it is kept small and well packed:

=====  ===========================  ==============================
Key    Slot                         Wire type
=====  ===========================  ==============================
`ctc`  tracking consent (required)  int: 0 granted, 1 notGranted, 2 pending
`lre`  last view event              object or absent
`lui`  last user info               object or absent
`lni`  last network info            object or absent
=====  ===========================  ==============================

Schema evolution
----------------
The keys above are permanent. New slots are added as new optional keys with
fresh short names; existing keys are never repurposed. Unknown keys are
ignored when decoding, so older readers accept newer snapshots.

A context is never patched in place: `replace()` rebuilds a new one from
domain values, and every slot holds copies, never references to live objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .bridges import consent as consent_bridge
from .bridges import network as network_bridge
from .bridges import user_info as user_info_bridge
from .bridges import view_event as view_event_bridge
from .bridges.network import WireNetworkInfo
from .bridges.user_info import WireUserInfo
from .bridges.view_event import WireViewEvent
from .codec import dumps, loads
from .contracts import NetworkConnectionInfo, TrackingConsent, UserInfo, ViewEvent
from .errors import UnrecognizedValueShape

KEY_TRACKING_CONSENT = "ctc"
KEY_LAST_VIEW_EVENT = "lre"
KEY_LAST_USER_INFO = "lui"
KEY_LAST_NETWORK_INFO = "lni"

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class CrashContext:
    """Versioned, wire-stable snapshot of the four tracked slots."""

    tracking_consent: TrackingConsent
    view_event: WireViewEvent | None = None
    user_info: WireUserInfo | None = None
    network_info: WireNetworkInfo | None = None

    # ----- Construction from domain values ------------------------------------

    @classmethod
    def build(
        cls,
        consent: TrackingConsent,
        view_event: ViewEvent | None = None,
        user_info: UserInfo | None = None,
        network_info: NetworkConnectionInfo | None = None,
    ) -> CrashContext:
        """Copy the given domain values into a fresh context."""
        return cls(
            tracking_consent=TrackingConsent(consent),
            view_event=None if view_event is None else view_event_bridge.to_wire(view_event),
            user_info=None if user_info is None else user_info_bridge.to_wire(user_info),
            network_info=None if network_info is None else network_bridge.to_wire(network_info),
        )

    def replace(
        self,
        *,
        consent: TrackingConsent = _UNSET,
        view_event: ViewEvent | None = _UNSET,
        user_info: UserInfo | None = _UNSET,
        network_info: NetworkConnectionInfo | None = _UNSET,
    ) -> CrashContext:
        """Return a new context with the given slots rebuilt from domain values."""
        return CrashContext(
            tracking_consent=(
                self.tracking_consent if consent is _UNSET else TrackingConsent(consent)
            ),
            view_event=(
                self.view_event
                if view_event is _UNSET
                else None if view_event is None else view_event_bridge.to_wire(view_event)
            ),
            user_info=(
                self.user_info
                if user_info is _UNSET
                else None if user_info is None else user_info_bridge.to_wire(user_info)
            ),
            network_info=(
                self.network_info
                if network_info is _UNSET
                else None if network_info is None else network_bridge.to_wire(network_info)
            ),
        )

    # ----- Domain getters -----------------------------------------------------

    @property
    def last_tracking_consent(self) -> TrackingConsent:
        return self.tracking_consent

    @property
    def last_view_event(self) -> ViewEvent | None:
        return None if self.view_event is None else view_event_bridge.to_domain(self.view_event)

    @property
    def last_user_info(self) -> UserInfo | None:
        return None if self.user_info is None else user_info_bridge.to_domain(self.user_info)

    @property
    def last_network_connection_info(self) -> NetworkConnectionInfo | None:
        if self.network_info is None:
            return None
        return network_bridge.to_domain(self.network_info)

    # ----- Wire form ----------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {KEY_TRACKING_CONSENT: consent_bridge.to_wire(self.tracking_consent)}
        if self.view_event is not None:
            out[KEY_LAST_VIEW_EVENT] = self.view_event.to_json()
        if self.user_info is not None:
            out[KEY_LAST_USER_INFO] = self.user_info.to_json()
        if self.network_info is not None:
            out[KEY_LAST_NETWORK_INFO] = self.network_info.to_json()
        return out

    def to_bytes(self) -> bytes:
        return dumps(self.to_json())

    @classmethod
    def from_json(cls, raw: Any) -> CrashContext:
        """Decode the parsed top-level object. Raises `DecodeError` subclasses."""
        if not isinstance(raw, dict):
            raise UnrecognizedValueShape("crash context must be a JSON object")
        if KEY_TRACKING_CONSENT not in raw:
            raise UnrecognizedValueShape("tracking consent is missing", (KEY_TRACKING_CONSENT,))

        def optional(key: str, decoder: Any) -> Any:
            value = raw.get(key)
            return None if value is None else decoder(value, (key,))

        return cls(
            tracking_consent=consent_bridge.to_domain(
                raw[KEY_TRACKING_CONSENT], (KEY_TRACKING_CONSENT,)
            ),
            view_event=optional(KEY_LAST_VIEW_EVENT, WireViewEvent.from_json),
            user_info=optional(KEY_LAST_USER_INFO, WireUserInfo.from_json),
            network_info=optional(KEY_LAST_NETWORK_INFO, WireNetworkInfo.from_json),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> CrashContext:
        return cls.from_json(loads(data))


__all__ = [
    "CrashContext",
    "KEY_LAST_NETWORK_INFO",
    "KEY_LAST_USER_INFO",
    "KEY_LAST_VIEW_EVENT",
    "KEY_TRACKING_CONSENT",
]
