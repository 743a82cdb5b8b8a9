"""Utility modules for imports and logging."""

from .imports import import_quietly
from .logging import setup_logging

__all__ = ["import_quietly", "setup_logging"]
