"""AI placement plugin exports."""

from .plugin import ACTIONS, AIPlacementPlugin, create_plugin

__all__ = ["ACTIONS", "AIPlacementPlugin", "create_plugin"]
