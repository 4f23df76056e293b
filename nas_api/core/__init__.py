"""Core app configuration, errors and security primitives."""

from nas_api.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
