"""Link plugin exports."""

from .plugin import LinkPlugin, create_plugin

__all__ = ["LinkPlugin", "create_plugin"]
