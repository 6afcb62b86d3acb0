"""Core configuration for Campaign Guard."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
