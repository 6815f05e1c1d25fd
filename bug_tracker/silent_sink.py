# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Silent error sink implementation for testing."""

import uuid
from typing import Any

from .error_sink import ErrorSink


class SilentSink(ErrorSink):
    """Silent error sink that records events in memory for testing.

    This implementation is useful for unit tests where you want to verify
    what would have been sent to the error tracker without producing any
    network traffic or output.
    """

    def __init__(self):
        """Initialize silent sink."""
        self.notified: list[dict[str, Any]] = []
        self.extra_context: dict[str, Any] = {}
        self.user: dict[str, Any] = {}
        self._last_event_id: str | None = None

    @classmethod
    def from_config(cls, config: Any) -> "SilentSink":
        """Create SilentSink from configuration.

        Args:
            config: BugTrackerConfig (ignored, no configuration needed)

        Returns:
            SilentSink instance
        """
        return cls()

    def notify(self, exception: BaseException, context: dict[str, Any]) -> str | None:
        """Record an exception with its merged context.

        Args:
            exception: The exception to record
            context: Merged context for this event

        Returns:
            Generated event identifier
        """
        event_id = uuid.uuid4().hex
        self.notified.append({
            "event_id": event_id,
            "error": exception,
            "error_type": type(exception).__name__,
            "error_message": str(exception),
            "context": dict(context),
        })
        self._last_event_id = event_id
        return event_id

    def set_extra_context(self, context: dict[str, Any]) -> None:
        self.extra_context.update(context)

    def set_user(self, user: dict[str, Any]) -> None:
        self.user = dict(user)

    def last_event_id(self) -> str | None:
        return self._last_event_id

    def get_errors(self, error_type: str | None = None) -> list[dict[str, Any]]:
        """Get all recorded errors, optionally filtered by type.

        Args:
            error_type: Optional error type name to filter by

        Returns:
            List of recorded error dictionaries
        """
        if error_type:
            return [e for e in self.notified if e["error_type"] == error_type]
        return self.notified

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return len(self.notified) > 0

    def clear(self) -> None:
        """Clear all recorded state."""
        self.notified.clear()
        self.extra_context.clear()
        self.user = {}
        self._last_event_id = None
