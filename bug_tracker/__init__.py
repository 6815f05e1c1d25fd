# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Bug Tracker error reporting library.

Wraps an error tracking service behind a uniform sink interface, provides a
base exception type carrying structured context, and merges that context with
call-site context before each event is sent.

Example:
    >>> from bug_tracker import BaseError, BugTracker, BugTrackerConfig
    >>>
    >>> tracker = BugTracker(BugTrackerConfig(sink="null"))
    >>> error = BaseError("API request failed", code=500, response="body")
    >>> tracker.notify(error, request_id="test-123")
"""

import logging
from typing import Any, Mapping, TextIO

from .adapter_factory import create_adapter
from .base_error import BaseError, HasContext, error_tag
from .config import BugTrackerConfig, EnvConfigProvider
from .context_manager import ContextManager, filter_trace, merge_context, render_diagnostic
from .error_sink import ErrorSink

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _build_null(config: BugTrackerConfig) -> ErrorSink:
    from .null_sink import NullSink

    return NullSink.from_config(config)


def _build_silent(config: BugTrackerConfig) -> ErrorSink:
    from .silent_sink import SilentSink

    return SilentSink.from_config(config)


def _build_sentry(config: BugTrackerConfig) -> ErrorSink:
    from .sentry_sink import SentrySink

    return SentrySink.from_config(config)


def create_sink(config: BugTrackerConfig) -> ErrorSink:
    """Create the error sink selected by configuration.

    Args:
        config: Tracker configuration. ``config.sink`` is either a driver
            name or an already constructed ErrorSink.

    Returns:
        ErrorSink instance.

    Raises:
        ValueError: If config is missing or the sink name is not recognized.
        TypeError: If ``config.sink`` is neither a name nor an ErrorSink.
    """
    if config is not None and isinstance(config.sink, ErrorSink):
        return config.sink
    if config is not None and not isinstance(config.sink, str):
        raise TypeError(
            f"sink must be a driver name or an ErrorSink, got {type(config.sink).__name__}"
        )

    return create_adapter(
        config,
        adapter_name="error_sink",
        get_driver_type=lambda c: c.sink,
        drivers={
            "null": _build_null,
            "silent": _build_silent,
            "sentry": _build_sentry,
        },
    )


class BugTracker:
    """Facade over one context manager and its sink.

    The sink is resolved when the tracker is built, so a bad sink name
    fails at startup rather than on the first reported error.
    """

    def __init__(self, config: BugTrackerConfig | None = None, stream: TextIO | None = None):
        self.config = config if config is not None else BugTrackerConfig.from_env()
        self.logger = (
            logging.getLogger(self.config.logger_name) if self.config.logger_name else logger
        )
        self.sink = create_sink(self.config)
        self.context_manager = ContextManager(self.sink, self.config, stream=stream)
        self.logger.debug("Bug tracker using %s", type(self.sink).__name__)

    def notify(
        self,
        exception: BaseException,
        context: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> str | None:
        event_id = self.context_manager.notify(exception, context, **kwargs)
        self.logger.debug("Reported %s (event %s)", type(exception).__name__, event_id)
        return event_id

    def set_extra_context(self, context: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self.context_manager.set_extra_context(context, **kwargs)

    def set_user(self, user: Mapping[str, Any]) -> None:
        self.context_manager.set_user(user)

    def last_event_id(self) -> str | None:
        return self.context_manager.last_event_id()


_default_tracker: BugTracker | None = None


def configure(config: BugTrackerConfig | None = None, stream: TextIO | None = None) -> BugTracker:
    """Build the default tracker; call once at application startup."""
    global _default_tracker
    _default_tracker = BugTracker(config, stream=stream)
    return _default_tracker


def get_tracker() -> BugTracker:
    """Return the default tracker, building one from the environment if needed."""
    if _default_tracker is None:
        return configure()
    return _default_tracker


def reset() -> None:
    """Forget the default tracker."""
    global _default_tracker
    _default_tracker = None


def notify(exception: BaseException, context: Mapping[str, Any] | None = None, **kwargs: Any) -> str | None:
    return get_tracker().notify(exception, context, **kwargs)


def set_extra_context(context: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
    get_tracker().set_extra_context(context, **kwargs)


def set_user(user: Mapping[str, Any]) -> None:
    get_tracker().set_user(user)


def last_event_id() -> str | None:
    return get_tracker().last_event_id()


__all__ = [
    # Version
    "__version__",
    # Errors
    "BaseError",
    "HasContext",
    "error_tag",
    # Configuration
    "BugTrackerConfig",
    "EnvConfigProvider",
    # Sinks
    "ErrorSink",
    "create_sink",
    # Context
    "ContextManager",
    "filter_trace",
    "merge_context",
    "render_diagnostic",
    # Facade
    "BugTracker",
    "configure",
    "get_tracker",
    "reset",
    "notify",
    "set_extra_context",
    "set_user",
    "last_event_id",
]
