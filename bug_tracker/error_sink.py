# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract error sink interface."""

from abc import ABC, abstractmethod
from typing import Any


class ErrorSink(ABC):
    """Abstract base class for error sinks.

    A sink is the destination that merged error events are forwarded to
    (Sentry, an in-memory recorder, nothing at all). The context manager only
    ever talks to this interface, so swapping the active sink does not change
    how callers report errors.
    """

    @abstractmethod
    def notify(self, exception: BaseException, context: dict[str, Any]) -> str | None:
        """Send an exception with its merged context.

        Args:
            exception: The exception to report
            context: Merged context for this event

        Returns:
            Event identifier assigned by the sink, or None
        """
        pass

    @abstractmethod
    def set_extra_context(self, context: dict[str, Any]) -> None:
        """Attach extra context to every subsequent event.

        Args:
            context: Key/value pairs to attach
        """
        pass

    @abstractmethod
    def set_user(self, user: dict[str, Any]) -> None:
        """Attach user information to every subsequent event.

        Args:
            user: User attributes (id, email, username, ...)
        """
        pass

    @abstractmethod
    def last_event_id(self) -> str | None:
        """Return the identifier of the last event sent, or None."""
        pass
