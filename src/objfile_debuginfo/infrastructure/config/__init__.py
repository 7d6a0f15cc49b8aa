"""Infrastructure configuration module."""

from .application_config import Config
from .settings import DEFAULT_SETTINGS, get_settings

__all__ = ["Config", "DEFAULT_SETTINGS", "get_settings"]
