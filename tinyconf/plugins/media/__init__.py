"""Media plugin exports."""

from .plugin import MediaPlugin, create_plugin

__all__ = ["MediaPlugin", "create_plugin"]
