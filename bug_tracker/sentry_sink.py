# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Sentry error sink implementation."""

import logging
from typing import Any

import sentry_sdk

from .config import BugTrackerConfig
from .error_sink import ErrorSink

logger = logging.getLogger(__name__)


class SentrySink(ErrorSink):
    """Sentry error sink for cloud-based error tracking.

    Every call is forwarded to the Sentry SDK, but only when the configured
    environment is one of the enabled environments. Outside of those every
    operation is a no-op.

    Example:
        sink = SentrySink(BugTrackerConfig(dsn="https://...@sentry.io/...",
                                           environment="production"))
        sink.notify(exception, {"user_id": "123"})
    """

    def __init__(self, config: BugTrackerConfig):
        """Initialize Sentry error sink.

        Args:
            config: Tracker configuration. When it carries a DSN and the
                environment is enabled, the Sentry SDK is initialized here.
        """
        self.config = config
        self._initialized = False

        if config.dsn and config.is_enabled():
            self._initialize_sentry()

    @classmethod
    def from_config(cls, config: BugTrackerConfig) -> "SentrySink":
        """Create a SentrySink from tracker configuration."""
        return cls(config)

    def _initialize_sentry(self) -> None:
        sentry_sdk.init(
            dsn=self.config.dsn,
            environment=self.config.environment,
        )
        self._initialized = True
        logger.info("Sentry initialized for environment %s", self.config.environment)

    def _enabled(self, operation: str) -> bool:
        if self.config.is_enabled():
            return True
        logger.debug(
            "Skipping Sentry %s: environment %r not in %s",
            operation,
            self.config.environment,
            self.config.enabled_environments,
        )
        return False

    def notify(self, exception: BaseException, context: dict[str, Any]) -> str | None:
        """Capture an exception with its merged context as Sentry extras.

        Args:
            exception: The exception to report
            context: Merged context for this event

        Returns:
            Sentry event id, or None when nothing was sent
        """
        if not self._enabled("notify"):
            return None

        return sentry_sdk.capture_exception(exception, extras=context)

    def set_extra_context(self, context: dict[str, Any]) -> None:
        if not self._enabled("set_extra_context"):
            return

        for key, value in context.items():
            sentry_sdk.set_extra(key, value)

    def set_user(self, user: dict[str, Any]) -> None:
        if not self._enabled("set_user"):
            return

        sentry_sdk.set_user(user)

    def last_event_id(self) -> str | None:
        if not self._enabled("last_event_id"):
            return None

        # Sentry reports dropped or ignored events as an empty id
        event_id = sentry_sdk.last_event_id()
        if not event_id:
            return None
        return event_id
