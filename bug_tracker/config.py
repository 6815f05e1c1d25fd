# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tracker configuration and its environment-backed provider."""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from .error_sink import ErrorSink

DEFAULT_ENABLED_ENVIRONMENTS = ["production", "staging"]
_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


class EnvConfigProvider:
    """Reads tracker settings from environment variables.

    Blank values are treated the same as unset ones.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._environ.get(key, "").strip()
        return value or default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Parse a boolean flag; unrecognized values give ``default``."""
        value = (self.get(key) or "").lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        return default

    def get_list(self, key: str, default: Optional[list[str]] = None) -> list[str]:
        """Get a comma-separated list, skipping blank items."""
        value = self.get(key)
        if value is None:
            return list(default or [])
        return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class BugTrackerConfig:
    """Configuration for a bug tracker instance.

    Attributes:
        sink: Driver name ("sentry", "null", "silent") or a ready ErrorSink
        enabled_environments: Environments in which the Sentry sink may send
        environment: Name of the current deployment environment, if known
        trace_filter: Substring used to pick application frames in diagnostics
        diagnostic_mode: Write a diagnostic block to the console on notify
        dsn: Sentry DSN
        logger_name: Optional logger name for the tracker's own log records
    """
    sink: Union[str, ErrorSink] = "sentry"
    enabled_environments: list[str] = field(
        default_factory=lambda: list(DEFAULT_ENABLED_ENVIRONMENTS)
    )
    environment: Optional[str] = None
    trace_filter: Optional[str] = None
    diagnostic_mode: bool = False
    dsn: Optional[str] = None
    logger_name: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "BugTrackerConfig":
        """Build a configuration from environment variables.

        Explicit keyword overrides always win over the environment.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            **overrides: Field values that take precedence

        Returns:
            BugTrackerConfig instance
        """
        env = EnvConfigProvider(environ)
        environment = env.get("BUG_TRACKER_ENVIRONMENT") or env.get("APP_ENV")

        values: dict[str, Any] = {
            "sink": env.get("BUG_TRACKER_SINK", "sentry"),
            "enabled_environments": env.get_list(
                "BUG_TRACKER_ENABLED_ENVIRONMENTS", DEFAULT_ENABLED_ENVIRONMENTS
            ),
            "environment": environment,
            "trace_filter": env.get("BUG_TRACKER_TRACE_FILTER"),
            "diagnostic_mode": env.get_bool(
                "BUG_TRACKER_DIAGNOSTIC_MODE", environment == "development"
            ),
            "dsn": env.get("SENTRY_DSN"),
            "logger_name": env.get("BUG_TRACKER_LOGGER_NAME"),
        }
        values.update(overrides)
        return cls(**values)

    def is_enabled(self) -> bool:
        """Return True when events may be sent from the current environment.

        With no environment known the tracker is always enabled.
        """
        if self.environment is None:
            return True
        return self.environment in self.enabled_environments
