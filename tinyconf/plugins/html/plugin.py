"""HTML plugin - source code view with syntax highlighting."""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting


class HtmlPlugin(Plugin):
    meta = PluginMeta(id="html", version="1.0.0")

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return []


def create_plugin() -> HtmlPlugin:
    return HtmlPlugin()
