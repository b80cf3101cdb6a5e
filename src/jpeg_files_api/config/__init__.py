"""
Configuration management for the JPEG Files API.

Contains the Pydantic settings model and the cached accessor used by the
application factory and the CLI.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
