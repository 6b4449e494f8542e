"""Tests for equation plugin."""

import json

from .. import DEFAULT_LIBRARY_GROUPS, create_plugin
from ...base import SettingsRequest


def _values(settings):
    return {s.name: s.value for s in settings}


class TestEquationSettings:
    """Test build_settings() output."""

    def test_setting_order(self, teacher_request):
        settings = create_plugin().build_settings(teacher_request)
        assert [s.name for s in settings] == ["texfilter", "libraries", "texdocsurl"]

    def test_texfilter_active(self, teacher_request):
        values = _values(create_plugin().build_settings(teacher_request))
        assert values["texfilter"] == "1"

    def test_texfilter_inactive(self, make_site, course_context, teacher):
        site = make_site({"config": {"filter_tex": {"active": False}}})
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        values = _values(create_plugin().build_settings(request))
        assert values["texfilter"] == "0"

    def test_texdocsurl(self, teacher_request):
        values = _values(create_plugin().build_settings(teacher_request))
        assert values["texdocsurl"] == "https://docs.moodle.org/500/en/Using_TeX_Notation"

    def test_libraries_is_compact_json(self, teacher_request):
        values = _values(create_plugin().build_settings(teacher_request))
        assert values["libraries"].startswith('[{"key":"group1"')

    def test_default_libraries(self, teacher_request):
        values = _values(create_plugin().build_settings(teacher_request))
        libraries = json.loads(values["libraries"])

        assert [group["key"] for group in libraries] == [
            "group1",
            "group2",
            "group3",
            "group4",
        ]
        assert [group["groupname"] for group in libraries] == [
            "Operators",
            "Arrows",
            "Greek symbols",
            "Advanced",
        ]
        assert libraries[0]["active"] is True
        assert all("active" not in group for group in libraries[1:])
        assert libraries[0]["elements"] == DEFAULT_LIBRARY_GROUPS["librarygroup1"].split("\n")
        assert "\\alpha" in libraries[2]["elements"]

    def test_custom_library_group_is_trimmed(self, make_site, course_context, teacher):
        site = make_site(
            {"config": {"tiny_equation": {"librarygroup2": "\n\\to\n\\gets\n\n"}}}
        )
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        libraries = json.loads(_values(create_plugin().build_settings(request))["libraries"])
        assert libraries[1]["elements"] == ["\\to", "\\gets"]

    def test_missing_group_name_string(self, make_site, course_context, teacher):
        site = make_site({"strings": {"tiny_equation": {"librarygroup1": "Ops"}}})
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        libraries = json.loads(_values(create_plugin().build_settings(request))["libraries"])
        assert libraries[0]["groupname"] == "Ops"
        assert libraries[1]["groupname"] == "Arrows"
