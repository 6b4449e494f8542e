"""Plugin registry - ordered table of editor plugins.

The registry handles:
- Plugin registration and validation
- Lookup by ID or required capability
- Iteration in registration order (which is the editor's plugin order)

Registration happens once at startup; afterwards the registry is only read.
"""

import sys
from typing import Optional, Type
from collections import defaultdict

from .base import Plugin, PluginMeta


class PluginError(Exception):
    """Error during plugin operations."""

    pass


class PluginRegistry:
    """Central registry for editor plugins."""

    def __init__(self):
        self._plugins: dict[str, Plugin] = {}  # id -> instance, in registration order
        self._capabilities: dict[str, list[str]] = defaultdict(
            list
        )  # capability -> [ids]

    def register(self, plugin_class: Type[Plugin]) -> Plugin:
        """Validate and register a plugin class.

        Args:
            plugin_class: Plugin class (not instance)

        Returns:
            Plugin instance

        Raises:
            PluginError: If plugin is invalid or already registered
        """
        # Validate it's a Plugin subclass
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, Plugin):
            raise PluginError(
                f"Invalid plugin: {plugin_class} is not a Plugin subclass"
            )

        # Check for meta attribute
        if not hasattr(plugin_class, "meta") or not isinstance(
            plugin_class.meta, PluginMeta
        ):
            raise PluginError(
                f"Plugin {plugin_class.__name__} missing valid 'meta' attribute"
            )

        meta = plugin_class.meta

        if meta.id in self._plugins:
            raise PluginError(f"Plugin '{meta.id}' already registered")

        try:
            instance = plugin_class()
        except Exception as e:
            raise PluginError(f"Failed to instantiate plugin '{meta.id}': {e}")

        self._plugins[meta.id] = instance

        for cap in meta.capabilities:
            self._capabilities[cap].append(meta.id)

        return instance

    def get(self, plugin_id: str) -> Optional[Plugin]:
        """Get plugin by ID.

        Args:
            plugin_id: Plugin identifier

        Returns:
            Plugin instance or None
        """
        return self._plugins.get(plugin_id)

    def all_with_capability(self, capability: str) -> list[Plugin]:
        """Get all plugins gated by a capability.

        Args:
            capability: Capability name (e.g., "tiny/h5p:addembed")

        Returns:
            List of plugin instances
        """
        plugin_ids = self._capabilities.get(capability, [])
        return [self._plugins[pid] for pid in plugin_ids if pid in self._plugins]

    def all_plugins(self) -> list[Plugin]:
        """Get all registered plugins in registration order."""
        return list(self._plugins.values())

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def list_plugins(self, site=None) -> list[dict]:
        """List all registered plugins with metadata.

        Args:
            site: Optional site; when given, each entry reports whether
                the plugin is enabled there

        Returns:
            List of plugin info dicts
        """
        info = []
        for plugin in self.all_plugins():
            entry = {
                "id": plugin.meta.id,
                "version": plugin.meta.version,
                "capabilities": plugin.meta.capabilities,
                "namespace": plugin.meta.namespace,
            }
            if site is not None:
                entry["enabled"] = plugin.is_enabled(site)
            info.append(entry)
        return info


# Global registry instance
_registry: Optional[PluginRegistry] = None


def get_registry() -> PluginRegistry:
    """Get the global plugin registry, registering the built-in plugins once."""
    global _registry
    if _registry is None:
        from . import register_builtin_plugins

        _registry = PluginRegistry()
        register_builtin_plugins(_registry)
        print(
            f"[Registry] Registered {len(_registry)} editor plugin(s)",
            file=sys.stderr,
        )
    return _registry


def reset_registry() -> None:
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None
