# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""No-op error sink for development and test environments."""

from typing import Any

from .error_sink import ErrorSink


class NullSink(ErrorSink):
    """Error sink that discards everything it is given."""

    @classmethod
    def from_config(cls, config: Any) -> "NullSink":
        """Create NullSink from configuration (nothing to configure)."""
        return cls()

    def notify(self, exception: BaseException, context: dict[str, Any]) -> str | None:
        return None

    def set_extra_context(self, context: dict[str, Any]) -> None:
        pass

    def set_user(self, user: dict[str, Any]) -> None:
        pass

    def last_event_id(self) -> str | None:
        return None
