"""Common module - errors and logging"""

from .logging import setup_logging

__all__ = ["setup_logging"]
