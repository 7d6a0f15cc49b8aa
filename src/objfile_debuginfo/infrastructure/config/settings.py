#!/usr/bin/env python3

"""Decoder and backend settings with environment variable overrides."""

import os
from typing import Any

ENV_PREFIX = "OBJFILE_"

DEFAULT_SETTINGS: dict[str, Any] = {
    # Reject debug streams that end without their end-of-list markers
    "STRICT_DEBUG_STREAM": False,
    # Collect DW_TAG_formal_parameter children as well as DW_TAG_variable
    "INCLUDE_PARAMETERS": True,
    # Report symbols with an empty name
    "INCLUDE_UNNAMED_SYMBOLS": False,
}

_TRUE_VALUES = ("true", "1", "yes", "on")


def get_settings() -> dict[str, Any]:
    """Get settings with OBJFILE_* environment variable overrides.

    Returns:
        Settings dictionary

    Raises:
        ValueError: If an override cannot be converted to the setting's type
    """
    settings = DEFAULT_SETTINGS.copy()

    for key, default in DEFAULT_SETTINGS.items():
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue
        if isinstance(default, bool):
            settings[key] = env_value.strip().lower() in _TRUE_VALUES
        elif isinstance(default, int):
            try:
                settings[key] = int(env_value, 0)
            except ValueError as e:
                raise ValueError(f"Invalid integer for {ENV_PREFIX}{key}: {env_value!r}") from e
        else:
            settings[key] = env_value

    return settings
