"""Tests for the single-writer CrashContextProvider."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from crashctx.core.context import CrashContext
from crashctx.core.contracts import NetworkConnectionInfo, TrackingConsent, UserInfo, ViewEvent
from crashctx.core.storage import MemoryContextStore
from crashctx.reporting import provider as provider_module
from crashctx.reporting.provider import CrashContextProvider


class BrokenStore(MemoryContextStore):
    def store(self, data: bytes) -> None:
        raise OSError("disk full")


def test_initial_snapshot_is_published() -> None:
    store = MemoryContextStore()
    provider = CrashContextProvider(store)
    assert store.load() == b'{"ctc":2}'
    assert provider.current_context.last_tracking_consent is TrackingConsent.PENDING


def test_every_update_replaces_the_stored_snapshot(
    view_event: ViewEvent, user_info: UserInfo, network_info: NetworkConnectionInfo
) -> None:
    store = MemoryContextStore()
    seen: list[CrashContext] = []
    provider = CrashContextProvider(store, consent=TrackingConsent.GRANTED, on_change=seen.append)

    provider.update_user_info(user_info)
    provider.update_view_event(view_event)
    provider.update_network_info(network_info)
    provider.update_tracking_consent(TrackingConsent.NOT_GRANTED)

    assert len(seen) == 5
    stored = store.load()
    assert stored == provider.current_bytes
    restored = CrashContext.from_bytes(stored or b"")
    assert restored.last_tracking_consent is TrackingConsent.NOT_GRANTED
    assert restored.last_user_info is not None and restored.last_user_info.id == "u1"
    assert restored.last_network_connection_info == network_info
    assert restored.last_view_event is not None


def test_clearing_a_slot(user_info: UserInfo) -> None:
    provider = CrashContextProvider(MemoryContextStore())
    provider.update_user_info(user_info)
    provider.update_user_info(None)
    assert provider.current_context.last_user_info is None
    assert provider.current_bytes == b'{"ctc":2}'


def test_store_failures_do_not_propagate(monkeypatch: Any, user_info: UserInfo) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(provider_module, "logger", fake_logger)

    provider = CrashContextProvider(BrokenStore())
    provider.update_user_info(user_info)

    assert provider.current_context.last_user_info is not None
    assert fake_logger.error.call_count == 2


def test_listener_failures_do_not_propagate(monkeypatch: Any) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(provider_module, "logger", fake_logger)

    def listener(_: CrashContext) -> None:
        raise RuntimeError("boom")

    provider = CrashContextProvider(on_change=listener)
    provider.update_tracking_consent(TrackingConsent.GRANTED)

    assert provider.current_context.last_tracking_consent is TrackingConsent.GRANTED
    assert fake_logger.exception.called


def test_invalid_update_keeps_previous_snapshot(monkeypatch: Any) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(provider_module, "logger", fake_logger)

    provider = CrashContextProvider(MemoryContextStore(), consent=TrackingConsent.GRANTED)
    before = provider.current_bytes
    provider.update_tracking_consent("maybe-later")  # type: ignore[arg-type]

    assert provider.current_bytes == before
    assert fake_logger.error.called


def test_update_with_cyclic_attribute_keeps_the_rest() -> None:
    cyclic: dict[str, Any] = {}
    cyclic["self"] = cyclic
    provider = CrashContextProvider(MemoryContextStore())

    provider.update_user_info(UserInfo(id="u1", extra_info={"plan": "pro", "loop": cyclic}))

    user = provider.current_context.last_user_info
    assert user is not None
    assert set(user.extra_info) == {"plan"}
