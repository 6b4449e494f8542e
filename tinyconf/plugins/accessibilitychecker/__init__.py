"""Accessibility checker plugin exports."""

from .plugin import AccessibilityCheckerPlugin, create_plugin

__all__ = ["AccessibilityCheckerPlugin", "create_plugin"]
