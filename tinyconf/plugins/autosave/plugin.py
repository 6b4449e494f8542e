"""Autosave plugin - keeps drafts of editor content between page loads."""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting


class AutosavePlugin(Plugin):
    meta = PluginMeta(id="autosave", version="1.0.0")

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return []


def create_plugin() -> AutosavePlugin:
    return AutosavePlugin()
