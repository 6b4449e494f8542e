"""Link plugin - insert and edit links, including repository files."""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting


class LinkPlugin(Plugin):
    meta = PluginMeta(id="link", version="1.0.0")

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return []


def create_plugin() -> LinkPlugin:
    return LinkPlugin()
