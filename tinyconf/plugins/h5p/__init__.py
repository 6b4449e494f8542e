"""H5P plugin exports."""

from .plugin import H5PPlugin, create_plugin

__all__ = ["H5PPlugin", "create_plugin"]
