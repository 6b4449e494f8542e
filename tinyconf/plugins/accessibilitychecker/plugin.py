"""Accessibility checker plugin - audits content for accessibility issues.

Runs entirely in the browser, so it sends no settings.
"""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting


class AccessibilityCheckerPlugin(Plugin):
    meta = PluginMeta(id="accessibilitychecker", version="1.0.0")

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return []


def create_plugin() -> AccessibilityCheckerPlugin:
    return AccessibilityCheckerPlugin()
