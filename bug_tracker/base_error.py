# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Base exception carrying structured context."""

import json
import re
import traceback
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


@runtime_checkable
class HasContext(Protocol):
    """Anything that carries its own context mapping."""

    context: Mapping[str, Any]


def error_tag(name: str) -> str:
    """Convert a class name to a snake_case tag.

    Example:
        >>> error_tag("HTTPTimeoutError")
        'http_timeout_error'
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def format_frames(error: BaseException) -> list[str]:
    """Return the traceback of an exception as one line per frame.

    Frames are ordered innermost first, so the raise site comes first.
    """
    if error.__traceback__ is None:
        return []
    frames = traceback.extract_tb(error.__traceback__)
    return [f"{frame.filename}:{frame.lineno}:in {frame.name}" for frame in reversed(frames)]


class BaseError(Exception):
    """Base class for application errors that carry structured context.

    Subclasses declare their own ``ERROR_CODE``. Context is free-form and
    is flattened into the top level of :meth:`serialize`, so subclasses
    should not use ``error``, ``error_code`` or ``message`` as context keys
    unless they mean to override them.

    Example:
        class ClientError(BaseError):
            ERROR_CODE = 502

        raise ClientError("API request failed", code=500, response=body)
    """

    ERROR_CODE = 500

    def __init__(
        self,
        message: str | None = None,
        context: Mapping[str, Any] | None = None,
        **context_kwargs: Any,
    ):
        if message is None:
            super().__init__()
        else:
            super().__init__(message)
        self.message = message
        self._context: dict[str, Any] = {**(context or {}), **context_kwargs}

    @property
    def context(self) -> Mapping[str, Any]:
        return MappingProxyType(self._context)

    @property
    def error_code(self) -> int:
        return type(self).ERROR_CODE

    def serialize(self, backtrace: bool = False) -> dict[str, Any]:
        """Serialize the error to a flat, JSON-able dictionary.

        Args:
            backtrace: Include the formatted traceback when one is available

        Returns:
            Dictionary with ``error``, ``error_code``, ``message`` and every
            context key, plus ``backtrace`` when requested and available
        """
        result: dict[str, Any] = {
            "error": error_tag(type(self).__name__),
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(self._context)

        if backtrace:
            frames = format_frames(self)
            if frames:
                result["backtrace"] = frames

        return result

    as_json = serialize

    def to_json(self, backtrace: bool = False) -> str:
        return json.dumps(self.serialize(backtrace=backtrace), default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, context={self._context!r})"
