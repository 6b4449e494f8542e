"""Tests for AI placement plugin."""

from .. import ACTIONS, AIPlacementPlugin, create_plugin
from ...base import SettingsRequest


def _values(settings):
    return {s.name: s.value for s in settings}


class TestAIPlacementPlugin:
    """Test AIPlacementPlugin class."""

    def test_create_plugin(self):
        plugin = create_plugin()
        assert isinstance(plugin, AIPlacementPlugin)

    def test_plugin_meta(self):
        plugin = create_plugin()
        assert plugin.meta.id == "aiplacement"
        assert plugin.meta.namespace == "tiny_aiplacement"
        assert set(plugin.meta.capabilities) == set(ACTIONS.values())


class TestAIPlacementSettings:
    """Test build_settings() output."""

    def test_teacher_settings(self, teacher_request):
        settings = create_plugin().build_settings(teacher_request)
        assert [s.to_dict() for s in settings] == [
            {"name": "policyagreed", "value": "0"},
            {"name": "generate_text", "value": "1"},
            {"name": "generate_image", "value": "1"},
        ]

    def test_policy_agreed(self, make_site, course_context, teacher):
        site = make_site({"ai": {"policy_agreed": [teacher.id]}})
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        settings = create_plugin().build_settings(request)
        assert _values(settings)["policyagreed"] == "1"

    def test_disabled_action(self, make_site, course_context, teacher):
        site = make_site(
            {
                "ai": {
                    "providers": [
                        {
                            "name": "text_only",
                            "enabled": True,
                            "actions": {"generate_text": True},
                        }
                    ]
                }
            }
        )
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        values = _values(create_plugin().build_settings(request))
        assert values["generate_text"] == "1"
        assert values["generate_image"] == "0"

    def test_disabled_provider(self, make_site, course_context, teacher):
        site = make_site(
            {
                "ai": {
                    "providers": [
                        {
                            "name": "off",
                            "enabled": False,
                            "actions": {"generate_text": True, "generate_image": True},
                        }
                    ]
                }
            }
        )
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        values = _values(create_plugin().build_settings(request))
        assert values["generate_text"] == "0"
        assert values["generate_image"] == "0"


class TestAIPlacementAccess:
    """Test capability gating and availability."""

    def test_guest_cannot_see(self, guest_request):
        assert create_plugin().user_can_see(guest_request) is False

    def test_teacher_can_see(self, teacher_request):
        assert create_plugin().user_can_see(teacher_request) is True

    def test_unavailable_when_placement_disabled(self, make_site, course_context, teacher):
        site = make_site({"config": {"aiplacement_editor": {"enabled": False}}})
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        assert create_plugin().is_available(request) is False

    def test_available_when_placement_enabled(self, teacher_request):
        assert create_plugin().is_available(teacher_request) is True
