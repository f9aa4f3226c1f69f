"""Core utilities shared across the package."""

from .config import GeneratorSettings, Settings, get_settings  # noqa: F401
from .log import get_logger  # noqa: F401

__all__ = ["GeneratorSettings", "Settings", "get_settings", "get_logger"]
