# scripts/smoke.py
"""
Smoke Test Script for the crash-context round trip.

Simulates one process that tracks state and "crashes", followed by a second
start that restores the last snapshot and sends the crash report.

Usage
-----
1. Use a throwaway file under artifacts/:
    $ uv run python scripts/smoke.py

2. Use an explicit snapshot path:
    $ uv run python scripts/smoke.py --path /tmp/context.json
"""

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from dotenv import load_dotenv

from crashctx.core.contracts import (
    Interface,
    NetworkConnectionInfo,
    Reachability,
    TrackingConsent,
    UserInfo,
)
from crashctx.core.storage import FileContextStore
from crashctx.reporting import (
    CrashContextProvider,
    CrashReport,
    load_previous_context,
    process_pending_crash,
)

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


class PrintingSender:
    """Stand-in for the crash-report uploader."""

    def send(self, report: CrashReport, context: bytes) -> None:
        print(f"📤 Sending {report.type!r} with {len(context)} bytes of context")


def main() -> None:
    """Execute the smoke workflow."""
    parser = argparse.ArgumentParser(description="Run crashctx smoke test")
    parser.add_argument("--path", "-p", type=str, default="artifacts/smoke/context.json")
    args = parser.parse_args()

    store = FileContextStore(Path(args.path))

    # 1. Live process: track state
    provider = CrashContextProvider(store, consent=TrackingConsent.GRANTED)
    provider.update_user_info(UserInfo(id="u1", extra_info={"plan": "pro", "seats": 3}))
    provider.update_network_info(
        NetworkConnectionInfo(
            reachability=Reachability.YES,
            available_interfaces=[Interface.WIFI],
            supports_ipv4=True,
        )
    )
    print(f"💾 Snapshot: {provider.current_bytes.decode('utf-8')}")

    # 2. Next start: restore and report
    previous = load_previous_context(store)
    if previous is None:
        print("❌ No previous context could be restored")
        return
    print(f"✅ Restored consent={previous.last_tracking_consent.value}")

    report = CrashReport(
        date=datetime.now(UTC),
        type="SIGABRT",
        message="smoke crash",
        stack_trace="<none>",
        context=store.load() or b"",
    )
    process_pending_crash(report, PrintingSender())


if __name__ == "__main__":
    main()
