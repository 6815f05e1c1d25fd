# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Generic helper for building adapter factories.

This module centralizes the common "switch on discriminant" pattern:
- accept a configuration object
- read its discriminant (e.g., the sink name)
- dispatch to the correct driver factory
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, TypeVar

logger = logging.getLogger(__name__)

TConfig = TypeVar("TConfig")
TAdapter = TypeVar("TAdapter")


def create_adapter(
    config: TConfig,
    *,
    adapter_name: str,
    get_driver_type: Callable[[TConfig], str],
    drivers: Mapping[str, Callable[[TConfig], TAdapter]],
) -> TAdapter:
    """Create an adapter instance from a configuration object.

    Args:
        config: Configuration carrying the discriminant.
        adapter_name: Human-friendly adapter name used in error messages.
        get_driver_type: Function that returns the discriminant string.
        drivers: Mapping of normalized driver type -> factory callable.

    Returns:
        Adapter instance.

    Raises:
        ValueError: If config is missing or driver type is unknown.
    """
    if config is None:
        raise ValueError(f"{adapter_name} config is required")

    driver_type = str(get_driver_type(config)).strip().lower()
    try:
        factory = drivers[driver_type]
    except KeyError as exc:
        supported = ", ".join(sorted(drivers.keys()))
        raise ValueError(
            f"Unknown {adapter_name} driver: {driver_type}. Supported drivers: {supported}"
        ) from exc

    logger.debug("Creating %s driver %s", adapter_name, driver_type)
    return factory(config)
