"""Equation plugin exports."""

from .plugin import DEFAULT_LIBRARY_GROUPS, EquationPlugin, create_plugin

__all__ = ["DEFAULT_LIBRARY_GROUPS", "EquationPlugin", "create_plugin"]
