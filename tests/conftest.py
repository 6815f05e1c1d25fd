# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Shared fixtures for bug_tracker tests."""

import pytest

import bug_tracker
from bug_tracker import sentry_sink


class FakeSentry:
    """Stand-in for the sentry_sdk module that records every call."""

    def __init__(self):
        self.init_calls: list[dict] = []
        self.captured: list[tuple] = []
        self.extras: dict = {}
        self.user: dict | None = None
        self.next_event_id: str | None = "evt-1"

    def init(self, **kwargs):
        self.init_calls.append(kwargs)

    def capture_exception(self, error, **scope_kwargs):
        self.captured.append((error, scope_kwargs))
        return self.next_event_id

    def set_extra(self, key, value):
        self.extras[key] = value

    def set_user(self, user):
        self.user = user

    def last_event_id(self):
        return self.next_event_id


@pytest.fixture
def fake_sentry(monkeypatch):
    """Replace sentry_sdk inside the Sentry sink with a recording fake."""
    fake = FakeSentry()
    monkeypatch.setattr(sentry_sink, "sentry_sdk", fake)
    return fake


@pytest.fixture(autouse=True)
def reset_default_tracker():
    """Reset the package default tracker before and after each test."""
    bug_tracker.reset()
    yield
    bug_tracker.reset()
