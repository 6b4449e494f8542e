"""HTML plugin exports."""

from .plugin import HtmlPlugin, create_plugin

__all__ = ["HtmlPlugin", "create_plugin"]
