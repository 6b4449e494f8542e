"""Shared fixtures: a small site with one course, an editing teacher and a guest."""

import copy

import pytest

from tinyconf.plugins import SettingsRequest, reset_registry
from tinyconf.site import SiteConfig, build_site

COURSE_ID = 2
COURSE_CONTEXT_ID = 3  # system=1, category=2, course=3
TEACHER_ID = 3
GUEST_ID = 4
OUTSIDER_ID = 5

SITE_DATA = {
    "config": {
        "editor_tiny": {
            "branding": False,
            "extended_valid_elements": "script[*]",
        },
        "tiny_autosave": {"disabled": True},
        "aiplacement_editor": {"enabled": True},
        "tiny_premium": {
            "apikey": "test_api_key",
            "advtable:enabled": True,
            "typography:enabled": True,
            "casechange:enabled": True,
        },
        "filter_tex": {"active": True},
    },
    "languages": {
        "en": "English (en)",
        "de": "Deutsch (de)",
        "fr": "Français (fr)",
    },
    "upload": {"server_limit": 8388608},
    "categories": [{"id": 1, "name": "Miscellaneous"}],
    "courses": [{"id": COURSE_ID, "category": 1}],
    "modules": [{"id": 10, "course": COURSE_ID, "maxbytes": 1048576}],
    "users": [
        {"id": 2, "username": "admin", "admin": True},
        {"id": TEACHER_ID, "username": "teacher1"},
        {"id": GUEST_ID, "username": "guest1"},
        {"id": OUTSIDER_ID, "username": "outsider"},
    ],
    "assignments": [
        {"user": TEACHER_ID, "role": "editingteacher", "context": "course", "instance": COURSE_ID},
        {"user": GUEST_ID, "role": "guest", "context": "course", "instance": COURSE_ID},
    ],
    "ai": {
        "providers": [
            {
                "name": "test_provider",
                "enabled": True,
                "actions": {"generate_text": True, "generate_image": True},
            }
        ],
    },
}


def _merge(base: dict, overrides: dict) -> dict:
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


@pytest.fixture(autouse=True)
def reset_plugins():
    """Reset plugin registry before each test."""
    reset_registry()
    yield
    reset_registry()


@pytest.fixture
def site_data():
    return copy.deepcopy(SITE_DATA)


@pytest.fixture
def site_config(site_data):
    return SiteConfig.from_dict(site_data)


@pytest.fixture
def site(site_config):
    return build_site(site_config)


@pytest.fixture
def make_site(site_data):
    """Build a site from the shared data with nested overrides applied."""

    def factory(overrides: dict = None):
        data = _merge(copy.deepcopy(site_data), overrides or {})
        return build_site(SiteConfig.from_dict(data))

    return factory


@pytest.fixture
def teacher(site_config):
    return site_config.get_user(TEACHER_ID)


@pytest.fixture
def guest(site_config):
    return site_config.get_user(GUEST_ID)


@pytest.fixture
def course_context(site):
    return site.contexts.resolve("course", COURSE_ID)


@pytest.fixture
def teacher_request(site, course_context, teacher):
    return SettingsRequest(site=site, context=course_context, user=teacher)


@pytest.fixture
def guest_request(site, course_context, guest):
    return SettingsRequest(site=site, context=course_context, user=guest)
