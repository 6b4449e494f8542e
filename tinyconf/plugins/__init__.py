"""Editor plugin system for tinyconf.

This module provides:
- Plugin base class and metadata (base.py)
- Plugin registry (registry.py)
- The built-in editor plugins, one package each

There is no directory scanning: BUILTIN_PLUGINS is the static table of
editor plugins, and its order is the order plugins appear in the
editor configuration.
"""

from .base import Plugin, PluginMeta, SettingsRequest, flag
from .registry import (
    PluginRegistry,
    PluginError,
    get_registry,
    reset_registry,
)
from .accessibilitychecker import AccessibilityCheckerPlugin
from .aiplacement import AIPlacementPlugin
from .autosave import AutosavePlugin
from .equation import EquationPlugin
from .h5p import H5PPlugin
from .html import HtmlPlugin
from .link import LinkPlugin
from .media import MediaPlugin
from .premium import PremiumPlugin
from .recordrtc import RecordRTCPlugin


BUILTIN_PLUGINS: list[type[Plugin]] = [
    AccessibilityCheckerPlugin,
    AIPlacementPlugin,
    AutosavePlugin,
    EquationPlugin,
    H5PPlugin,
    HtmlPlugin,
    LinkPlugin,
    MediaPlugin,
    PremiumPlugin,
    RecordRTCPlugin,
]


def register_builtin_plugins(registry: PluginRegistry) -> PluginRegistry:
    """Register every built-in editor plugin, in editor order.

    Args:
        registry: Registry to fill

    Returns:
        The same registry, for chaining
    """
    for plugin_class in BUILTIN_PLUGINS:
        registry.register(plugin_class)
    return registry


__all__ = [
    # Base
    "Plugin",
    "PluginMeta",
    "SettingsRequest",
    "flag",
    # Registry
    "PluginRegistry",
    "PluginError",
    "get_registry",
    "reset_registry",
    # Built-ins
    "BUILTIN_PLUGINS",
    "register_builtin_plugins",
]
