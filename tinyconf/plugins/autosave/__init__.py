"""Autosave plugin exports."""

from .plugin import AutosavePlugin, create_plugin

__all__ = ["AutosavePlugin", "create_plugin"]
