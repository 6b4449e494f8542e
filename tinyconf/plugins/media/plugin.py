"""Media plugin - embed images, audio and video."""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting


class MediaPlugin(Plugin):
    meta = PluginMeta(id="media", version="1.0.0")

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        # Repository and file picker options travel with the editor
        # options, not with the plugin configuration.
        return []


def create_plugin() -> MediaPlugin:
    return MediaPlugin()
