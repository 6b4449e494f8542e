"""AI placement plugin - text and image generation inside the editor.

Visible only when the editor AI placement is switched on and the user
may generate at least one kind of content in the context.
"""

from ..base import Plugin, PluginMeta, SettingsRequest, flag
from ...interfaces import Setting

PLACEMENT_NAMESPACE = "aiplacement_editor"

# Action name -> capability needed to use it through the editor
ACTIONS = {
    "generate_text": "aiplacement/editor:generate_text",
    "generate_image": "aiplacement/editor:generate_image",
}


class AIPlacementPlugin(Plugin):
    """Reports policy acceptance and which AI actions the user can run."""

    meta = PluginMeta(
        id="aiplacement",
        version="1.0.0",
        capabilities=list(ACTIONS.values()),
    )

    def is_available(self, request: SettingsRequest) -> bool:
        return request.site.config.get_bool(PLACEMENT_NAMESPACE, "enabled")

    def action_allowed(self, request: SettingsRequest, action: str) -> bool:
        """Action is enabled on some provider and the user may use it here."""
        capability = ACTIONS[action]
        return request.site.ai.is_action_available(action) and request.has_capability(
            capability
        )

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        settings = [
            Setting("policyagreed", flag(request.site.ai.user_policy_status(request.user)))
        ]
        for action in ACTIONS:
            settings.append(Setting(action, flag(self.action_allowed(request, action))))
        return settings


def create_plugin() -> AIPlacementPlugin:
    return AIPlacementPlugin()
