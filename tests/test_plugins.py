"""Tests for plugin system (registry, base)."""

import pytest

from tinyconf.interfaces import Setting
from tinyconf.plugins import (
    BUILTIN_PLUGINS,
    Plugin,
    PluginMeta,
    PluginRegistry,
    PluginError,
    SettingsRequest,
    flag,
    get_registry,
    register_builtin_plugins,
    reset_registry,
)


# --- Test Plugin Classes ---


class DummyPlugin(Plugin):
    """A simple test plugin."""

    meta = PluginMeta(
        id="dummy",
        version="1.0.0",
        capabilities=["tiny/dummy:use"],
    )

    def build_settings(self, request):
        return [Setting("colour", self.get_config(request, "colour", "red"))]


class OpenPlugin(Plugin):
    """Plugin with no capability requirement."""

    meta = PluginMeta(id="open", version="1.0.0")

    def build_settings(self, request):
        return []


class NotAPlugin:
    meta = PluginMeta(id="fake", version="1.0.0")


# --- Tests ---


class TestPluginMeta:
    """Test PluginMeta dataclass."""

    def test_create_meta(self):
        meta = PluginMeta(
            id="test",
            version="1.0.0",
            capabilities=["tiny/test:use"],
            namespace="custom_ns",
        )
        assert meta.id == "test"
        assert meta.version == "1.0.0"
        assert "tiny/test:use" in meta.capabilities
        assert meta.namespace == "custom_ns"

    def test_default_values(self):
        meta = PluginMeta(id="test", version="1.0.0")
        assert meta.capabilities == []
        assert meta.namespace == "tiny_test"

    def test_id_required(self):
        with pytest.raises(ValueError):
            PluginMeta(id="", version="1.0.0")

    def test_version_required(self):
        with pytest.raises(ValueError):
            PluginMeta(id="test", version="")


class TestPluginBase:
    def test_flag(self):
        assert flag(True) == "1"
        assert flag(False) == "0"

    def test_get_config_uses_own_namespace(self, make_site, course_context, teacher):
        site = make_site({"config": {"tiny_dummy": {"colour": "blue"}}})
        request = SettingsRequest(site=site, context=course_context, user=teacher)
        assert DummyPlugin().build_settings(request) == [Setting("colour", "blue")]

    def test_get_config_default(self, teacher_request):
        assert DummyPlugin().build_settings(teacher_request) == [Setting("colour", "red")]

    def test_no_capabilities_means_visible(self, guest_request):
        assert OpenPlugin().user_can_see(guest_request) is True

    def test_any_capability_is_enough(self, make_site, course_context, guest):
        site = make_site({"roles": {"guest": ["tiny/dummy:use"]}})
        request = SettingsRequest(site=site, context=course_context, user=guest)
        assert DummyPlugin().user_can_see(request) is True

    def test_missing_capability(self, guest_request):
        assert DummyPlugin().user_can_see(guest_request) is False

    def test_enabled_by_default(self, site):
        assert OpenPlugin().is_enabled(site) is True

    def test_disabled_flag(self, make_site):
        site = make_site({"config": {"tiny_open": {"disabled": 1}}})
        assert OpenPlugin().is_enabled(site) is False


class TestPluginRegistry:
    """Test PluginRegistry class."""

    def test_register_plugin(self):
        registry = PluginRegistry()
        registry.register(DummyPlugin)

        assert registry.get("dummy") is not None
        assert "dummy" in registry

    def test_get_nonexistent_plugin(self):
        registry = PluginRegistry()
        assert registry.get("nonexistent") is None

    def test_registration_order(self):
        registry = PluginRegistry()
        registry.register(OpenPlugin)
        registry.register(DummyPlugin)

        assert [p.name for p in registry.all_plugins()] == ["open", "dummy"]

    def test_all_with_capability(self):
        registry = PluginRegistry()
        registry.register(DummyPlugin)
        registry.register(OpenPlugin)

        gated = registry.all_with_capability("tiny/dummy:use")
        assert [p.name for p in gated] == ["dummy"]
        assert registry.all_with_capability("tiny/other:use") == []

    def test_duplicate_registration_raises(self):
        registry = PluginRegistry()
        registry.register(DummyPlugin)

        with pytest.raises(PluginError):
            registry.register(DummyPlugin)

    def test_invalid_class_raises(self):
        registry = PluginRegistry()
        with pytest.raises(PluginError):
            registry.register(NotAPlugin)

    def test_list_plugins(self, make_site):
        registry = PluginRegistry()
        registry.register(OpenPlugin)
        site = make_site({"config": {"tiny_open": {"disabled": True}}})

        assert registry.list_plugins() == [
            {
                "id": "open",
                "version": "1.0.0",
                "capabilities": [],
                "namespace": "tiny_open",
            }
        ]
        assert registry.list_plugins(site)[0]["enabled"] is False


class TestBuiltinPlugins:
    def test_builtin_order(self):
        registry = register_builtin_plugins(PluginRegistry())
        assert [p.name for p in registry.all_plugins()] == [
            "accessibilitychecker",
            "aiplacement",
            "autosave",
            "equation",
            "h5p",
            "html",
            "link",
            "media",
            "premium",
            "recordrtc",
        ]
        assert len(registry) == len(BUILTIN_PLUGINS)

    @pytest.mark.parametrize("name", ["accessibilitychecker", "autosave", "html", "link", "media"])
    def test_plugins_without_settings(self, name, teacher_request):
        plugin = get_registry().get(name)
        assert plugin.meta.capabilities == []
        assert plugin.build_settings(teacher_request) == []


class TestGlobalRegistry:
    """Test global registry functions."""

    def test_get_registry_returns_singleton(self):
        reg1 = get_registry()
        reg2 = get_registry()
        assert reg1 is reg2

    def test_get_registry_has_builtins(self):
        assert get_registry().get("equation") is not None

    def test_reset_registry(self):
        reg1 = get_registry()
        reset_registry()
        reg2 = get_registry()
        assert reg1 is not reg2
