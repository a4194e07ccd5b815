"""Core module - settings and identity provider client"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
