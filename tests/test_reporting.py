"""Tests for the restart path that attaches context to crash reports."""

from __future__ import annotations

from datetime import UTC, datetime

from crashctx.core.contracts import TrackingConsent, UserInfo
from crashctx.core.snapshot import NO_CONTEXT, build_snapshot
from crashctx.core.storage import MemoryContextStore
from crashctx.reporting import CrashReport, load_previous_context, process_pending_crash


class RecordingSender:
    def __init__(self) -> None:
        self.sent: list[tuple[CrashReport, bytes]] = []

    def send(self, report: CrashReport, context: bytes) -> None:
        self.sent.append((report, context))


def _report(context: bytes) -> CrashReport:
    return CrashReport(
        date=datetime(2026, 1, 1, tzinfo=UTC),
        type="SIGSEGV",
        message="segfault",
        stack_trace="0 app main",
        context=context,
    )


def test_valid_context_is_sent_unchanged(user_info: UserInfo) -> None:
    data = build_snapshot(TrackingConsent.GRANTED, user_info=user_info)
    sender = RecordingSender()

    context = process_pending_crash(_report(data), sender)

    assert context is not None
    assert context.last_tracking_consent is TrackingConsent.GRANTED
    assert sender.sent[0][1] == data


def test_garbled_context_is_replaced_with_no_context(user_info: UserInfo) -> None:
    data = build_snapshot(TrackingConsent.GRANTED, user_info=user_info)
    sender = RecordingSender()

    context = process_pending_crash(_report(data[:-7]), sender)

    assert context is None
    assert len(sender.sent) == 1
    assert sender.sent[0][1] == NO_CONTEXT


def test_report_without_context() -> None:
    sender = RecordingSender()
    assert process_pending_crash(_report(NO_CONTEXT), sender) is None
    assert sender.sent[0][1] == NO_CONTEXT


def test_unknown_consent_is_treated_as_no_context() -> None:
    sender = RecordingSender()
    assert process_pending_crash(_report(b'{"ctc":99}'), sender) is None
    assert sender.sent[0][1] == NO_CONTEXT


def test_load_previous_context() -> None:
    assert load_previous_context(MemoryContextStore()) is None
    assert load_previous_context(MemoryContextStore(b'{"ctc":0,"lui":{"id"')) is None

    store = MemoryContextStore(build_snapshot(TrackingConsent.NOT_GRANTED))
    context = load_previous_context(store)
    assert context is not None
    assert context.last_tracking_consent is TrackingConsent.NOT_GRANTED
