"""Synthetic financial dataset generator."""

from .core import get_logger, get_settings
from .main import create_app
from .services import generate_financial_data

__all__ = ["create_app", "generate_financial_data", "get_logger", "get_settings"]
