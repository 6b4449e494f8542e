"""Plugin base class and metadata.

All editor plugins must inherit from Plugin and define a PluginMeta.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..interfaces import Context, Setting, Site, User


@dataclass
class PluginMeta:
    """Plugin metadata - defines identity and access requirements."""

    id: str  # Editor plugin name: "equation", "h5p"
    version: str  # Semver: "1.0.0"
    capabilities: list[str] = field(
        default_factory=list
    )  # User needs any one of these in the context; empty means no check
    namespace: str = ""  # Config namespace, defaults to "tiny_<id>"

    def __post_init__(self):
        if not self.id:
            raise ValueError("Plugin id is required")
        if not self.version:
            raise ValueError("Plugin version is required")
        if not self.namespace:
            self.namespace = f"tiny_{self.id}"


@dataclass(frozen=True)
class SettingsRequest:
    """Who is asking, where, and the site to answer from."""

    site: Site
    context: Context
    user: User

    def has_capability(self, capability: str) -> bool:
        return self.site.permissions.has_capability(
            self.user, capability, self.context
        )

    def get_config(
        self, namespace: str, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        value = self.site.config.get(namespace, key)
        return default if value is None else value


def flag(value: bool) -> str:
    """Render a boolean the way the editor expects it."""
    return "1" if value else "0"


class Plugin(ABC):
    """Base class for all editor plugins.

    Plugins must:
    1. Define a `meta` class attribute with PluginMeta
    2. Implement build_settings()
    3. Optionally override is_available() for checks beyond capabilities

    Example:
        class MyPlugin(Plugin):
            meta = PluginMeta(
                id="myplugin",
                version="1.0.0",
                capabilities=["tiny/myplugin:use"],
            )

            def build_settings(self, request: SettingsRequest) -> list[Setting]:
                return [Setting("colour", self.get_config(request, "colour", "red"))]
    """

    meta: PluginMeta  # Must be defined by subclass

    @property
    def name(self) -> str:
        return self.meta.id

    def is_enabled(self, site: Site) -> bool:
        """Whether the plugin is switched on site-wide."""
        return site.plugins.is_enabled(self.meta.id)

    def user_can_see(self, request: SettingsRequest) -> bool:
        """Whether the user holds any of the required capabilities."""
        if not self.meta.capabilities:
            return True
        return any(request.has_capability(cap) for cap in self.meta.capabilities)

    def is_available(self, request: SettingsRequest) -> bool:
        """Extra plugin-specific availability check.

        Called only after the capability check passed.
        """
        return True

    def get_config(
        self, request: SettingsRequest, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Read a key from this plugin's own config namespace."""
        return request.get_config(self.meta.namespace, key, default)

    @abstractmethod
    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        """Build this plugin's settings for the editor.

        Must not raise for missing optional configuration; fall back
        to defaults instead.

        Args:
            request: Site, context and user for this request

        Returns:
            Settings in their declared order
        """
        pass
