# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Check that error context survives the trip to the sink.

Raises a few representative errors, reports them through a tracker backed
by the silent sink with diagnostic mode on, and compares what the sink
received against the expected merged context.
"""

import argparse
import sys
from typing import Any

from . import BugTracker
from .base_error import BaseError
from .config import BugTrackerConfig
from .silent_sink import SilentSink


class ClientError(BaseError):
    ERROR_CODE = 502


def _scenarios() -> list[tuple[str, BaseException, dict[str, Any], dict[str, Any]]]:
    try:
        raise RuntimeError("Regular exception")
    except RuntimeError as e:
        plain = e

    return [
        (
            "BaseError with context",
            ClientError("API request failed", code=500, response='{"error": "Internal Server Error"}'),
            {"request_id": "test-123"},
            {"code": 500, "response": '{"error": "Internal Server Error"}', "request_id": "test-123"},
        ),
        (
            "Merging contexts",
            ClientError("Another error", user_id=456),
            {"order_id": 789},
            {"user_id": 456, "order_id": 789},
        ),
        (
            "Call-site context wins",
            ClientError("Overridden", user_id=456),
            {"user_id": 999},
            {"user_id": 999},
        ),
        (
            "Standard exception",
            plain,
            {"user_id": 123, "action": "test"},
            {"user_id": 123, "action": "test"},
        ),
    ]


def run(trace_filter: str | None = None, out=None) -> int:
    """Run every scenario and return the number of failures."""
    out = out or sys.stdout
    sink = SilentSink()
    tracker = BugTracker(
        BugTrackerConfig(sink=sink, diagnostic_mode=True, trace_filter=trace_filter),
        stream=out,
    )

    failures = 0
    for title, error, ad_hoc, expected in _scenarios():
        print(title, file=out)
        print("-" * 40, file=out)
        tracker.notify(error, ad_hoc)
        received = sink.notified[-1]["context"]
        if received == expected:
            print("OK", file=out)
        else:
            failures += 1
            print(f"FAILED: expected {expected!r}, got {received!r}", file=out)
        print("", file=out)

    return failures


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: ``python -m bug_tracker verify``."""
    parser = argparse.ArgumentParser(
        prog="python -m bug_tracker",
        description="Bug tracker tools"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    verify = commands.add_parser(
        "verify",
        help="Verify that error context is merged and forwarded"
    )
    verify.add_argument(
        "--trace-filter",
        default=None,
        help="Only show traceback frames containing this substring"
    )

    args = parser.parse_args(argv)

    failures = run(trace_filter=args.trace_filter)
    if failures:
        print(f"{failures} scenario(s) failed", file=sys.stderr)
        sys.exit(1)
    print("All scenarios passed")
