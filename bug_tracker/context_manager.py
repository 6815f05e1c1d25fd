# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Context merging and forwarding to the active error sink."""

import sys
from collections.abc import Mapping
from typing import Any, TextIO

from .base_error import HasContext, format_frames
from .config import BugTrackerConfig
from .error_sink import ErrorSink

RULE = "=" * 80
MAX_FRAMES = 10


def merge_context(
    exception: BaseException,
    ad_hoc: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge an exception's own context with call-site context.

    The exception's ``context`` attribute is read directly. If it is missing
    or is not a mapping the exception contributes nothing. Keys from
    ``ad_hoc`` override keys from the exception.

    Args:
        exception: The exception being reported
        ad_hoc: Context supplied at the reporting call site

    Returns:
        A new dictionary; the exception's mapping is left untouched
    """
    merged: dict[str, Any] = {}
    if isinstance(exception, HasContext):
        ambient = exception.context
        if isinstance(ambient, Mapping):
            merged.update(ambient)
    if ad_hoc:
        merged.update(ad_hoc)
    return merged


def filter_trace(frames: list[str], trace_filter: str | None) -> list[str]:
    """Keep the frames containing ``trace_filter``.

    Falls back to the unfiltered frames when nothing matches.
    """
    if not trace_filter:
        return frames
    filtered = [frame for frame in frames if trace_filter in frame]
    return filtered or frames


def render_diagnostic(
    exception: BaseException,
    context: Mapping[str, Any],
    trace_filter: str | None = None,
) -> str:
    """Render a human-readable summary of an exception for local development.

    Args:
        exception: The exception being reported
        context: The merged context that will be sent
        trace_filter: Optional substring selecting application frames

    Returns:
        Multi-line text block ending with a newline
    """
    lines = [
        "",
        RULE,
        f"BugTracker: {type(exception).__name__}: {exception}",
        RULE,
    ]

    frames = filter_trace(format_frames(exception), trace_filter)
    lines.extend(f"  {frame}" for frame in frames[:MAX_FRAMES])
    if len(frames) > MAX_FRAMES:
        lines.append(f"  ... ({len(frames) - MAX_FRAMES} more lines)")

    if context:
        lines.append("")
        lines.append("Extra context:")
        lines.extend(f"  {key}: {value!r}" for key, value in context.items())

    lines.append(RULE)
    return "\n".join(lines) + "\n"


class ContextManager:
    """Merges context for each reported exception and forwards it to a sink."""

    def __init__(
        self,
        sink: ErrorSink,
        config: BugTrackerConfig,
        stream: TextIO | None = None,
    ):
        """Initialize the context manager.

        Args:
            sink: Destination for merged events
            config: Tracker configuration (diagnostic mode, trace filter)
            stream: Where diagnostics are written (defaults to sys.stdout)
        """
        self.sink = sink
        self.config = config
        self.stream = stream

    def notify(
        self,
        exception: BaseException,
        context: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> str | None:
        """Report an exception with merged context.

        Precedence, lowest first: the exception's own context, ``context``,
        keyword arguments. Errors raised by the sink are not caught.

        Args:
            exception: The exception to report
            context: Optional mapping of call-site context
            **kwargs: Additional call-site context

        Returns:
            Event identifier from the sink, or None
        """
        merged = merge_context(exception, {**(context or {}), **kwargs})

        if self.config.diagnostic_mode:
            stream = self.stream or sys.stdout
            stream.write(render_diagnostic(exception, merged, self.config.trace_filter))

        return self.sink.notify(exception, merged)

    def set_extra_context(self, context: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self.sink.set_extra_context({**(context or {}), **kwargs})

    def set_user(self, user: Mapping[str, Any]) -> None:
        self.sink.set_user(dict(user))

    def last_event_id(self) -> str | None:
        return self.sink.last_event_id()
