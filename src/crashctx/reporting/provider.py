"""CrashContextProvider: the single writer of the crash context.

The state-tracking side of an SDK calls one of the ``update_*`` methods
whenever consent, the current view, the user or the network changes. Each call:

1. rebuilds a fresh `CrashContext` from the new domain value plus the slots
   already held (copies, never live references),
2. encodes it synchronously,
3. swaps it in as the current snapshot (a single assignment under a lock, so
   readers always see a complete context),
4. hands the bytes to the context store and notifies ``on_change``.

None of these steps may crash the host application: failures are logged and
the previous snapshot stays in place.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from crashctx.core.context import CrashContext
from crashctx.core.contracts import NetworkConnectionInfo, TrackingConsent, UserInfo, ViewEvent
from crashctx.core.errors import CrashContextError
from crashctx.core.settings import get_logger
from crashctx.core.snapshot import encode_context
from crashctx.core.storage import ContextStore

logger = get_logger("crashctx.provider")

ContextListener = Callable[[CrashContext], None]


class CrashContextProvider:
    """Own the current crash context and publish every new snapshot."""

    def __init__(
        self,
        store: ContextStore | None = None,
        *,
        consent: TrackingConsent = TrackingConsent.PENDING,
        on_change: ContextListener | None = None,
    ) -> None:
        self._store = store
        self._lock = threading.Lock()
        self.on_change = on_change
        self._context = CrashContext.build(consent)
        self._bytes = encode_context(self._context)
        self._publish(self._context, self._bytes)

    # ----- Readers --------------------------------------------------------------

    @property
    def current_context(self) -> CrashContext:
        with self._lock:
            return self._context

    @property
    def current_bytes(self) -> bytes:
        with self._lock:
            return self._bytes

    # ----- Writers --------------------------------------------------------------

    def update_tracking_consent(self, consent: TrackingConsent) -> None:
        self._update(consent=consent)

    def update_view_event(self, view_event: ViewEvent | None) -> None:
        self._update(view_event=view_event)

    def update_user_info(self, user_info: UserInfo | None) -> None:
        self._update(user_info=user_info)

    def update_network_info(self, network_info: NetworkConnectionInfo | None) -> None:
        self._update(network_info=network_info)

    def _update(self, **changes: Any) -> None:
        try:
            context = self._context.replace(**changes)
        except (CrashContextError, ValueError) as exc:
            logger.error("Ignoring crash context update %s: %s", sorted(changes), exc)
            return
        data = encode_context(context)
        with self._lock:
            self._context = context
            self._bytes = data
        self._publish(context, data)

    def _publish(self, context: CrashContext, data: bytes) -> None:
        if self._store is not None:
            try:
                self._store.store(data)
            except OSError as exc:
                logger.error("Failed to persist crash context: %s", exc)
        if self.on_change is not None:
            try:
                self.on_change(context)
            except Exception:
                logger.exception("Crash context listener failed")


__all__ = ["ContextListener", "CrashContextProvider"]
