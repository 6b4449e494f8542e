"""YAML-backed site - the collaborators the aggregator reads from.

A site file describes the key-value configuration, installed languages,
the course/category/module tree, users, roles and AI providers. Each
collaborator interface gets a small implementation reading from the
parsed SiteConfig.
"""

import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .interfaces import (
    AIManager,
    ConfigStore,
    Context,
    ContextResolver,
    InvalidContextError,
    LanguageCatalog,
    NotFoundError,
    PermissionChecker,
    PluginManager,
    Site,
    UploadLimitService,
    User,
    CONTEXT_LEVELS,
)

SYSTEM_CONTEXT_ID = 1

DEFAULT_LANGUAGES = {"en": "English (en)"}

DEFAULT_STRINGS = {
    "tiny_equation": {
        "librarygroup1": "Operators",
        "librarygroup2": "Arrows",
        "librarygroup3": "Greek symbols",
        "librarygroup4": "Advanced",
    },
}

DEFAULT_DOCS = {"root": "https://docs.moodle.org", "branch": "500", "lang": "en"}

# Role archetypes; the site file may override them or add its own
DEFAULT_ROLES = {
    "manager": [
        "aiplacement/editor:generate_text",
        "aiplacement/editor:generate_image",
        "tiny/h5p:addembed",
        "moodle/h5p:deploy",
        "tiny/premium:accesspremium",
    ],
    "editingteacher": [
        "aiplacement/editor:generate_text",
        "aiplacement/editor:generate_image",
        "tiny/h5p:addembed",
        "moodle/h5p:deploy",
        "tiny/premium:accesspremium",
    ],
    "teacher": [
        "aiplacement/editor:generate_text",
        "aiplacement/editor:generate_image",
        "tiny/h5p:addembed",
        "tiny/premium:accesspremium",
    ],
    "student": ["tiny/premium:accesspremium"],
    "guest": ["tiny/premium:accesspremium"],
}

# Used when neither the server nor the site sets an upload limit
DEFAULT_SERVER_UPLOAD_LIMIT = 2 * 1024 * 1024


class SiteConfigError(Exception):
    """Site file is malformed."""

    pass


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in strings."""
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replacer(match):
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            return match.group(2) or ""

        return re.sub(pattern, replacer, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(v) for v in value]
    else:
        return value


def _to_text(value: Any) -> Optional[str]:
    """Render a YAML value the way a key-value store hands it back."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, list):
        return "\n".join(str(v) for v in value)
    return str(value)


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _section(data: dict, key: str, kind: type) -> Any:
    """Get a top-level section, treating an empty one as missing.

    Raises:
        SiteConfigError: If the section has the wrong shape
    """
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        expected = "a mapping" if kind is dict else "a list"
        raise SiteConfigError(f"'{key}' must be {expected}")
    return value


@dataclass
class SiteConfig:
    """Parsed site file."""

    config: dict[str, dict[str, Any]] = field(default_factory=dict)
    languages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_LANGUAGES))
    strings: dict[str, dict[str, str]] = field(default_factory=dict)
    docs: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DOCS))
    upload: dict[str, int] = field(default_factory=dict)
    categories: list[dict] = field(default_factory=list)
    courses: list[dict] = field(default_factory=list)
    modules: list[dict] = field(default_factory=list)
    users: list[dict] = field(default_factory=list)
    roles: dict[str, list[str]] = field(default_factory=lambda: dict(DEFAULT_ROLES))
    assignments: list[dict] = field(default_factory=list)
    ai: dict[str, Any] = field(default_factory=dict)

    # Raw data, for display
    _raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "SiteConfig":
        """Create site config from dictionary."""
        data = _expand_env_vars(data or {})

        config = data.get("config") or {}
        if not isinstance(config, dict):
            raise SiteConfigError("'config' must map namespaces to settings")
        for namespace, settings in list(config.items()):
            if settings is None:
                config[namespace] = settings = {}
            if not isinstance(settings, dict):
                raise SiteConfigError(f"config.{namespace} must be a mapping")
            for key, value in settings.items():
                if isinstance(value, list) and all(_is_scalar(v) for v in value):
                    continue
                if not _is_scalar(value):
                    raise SiteConfigError(
                        f"config.{namespace}.{key} must be a scalar or a list of scalars"
                    )

        docs = dict(DEFAULT_DOCS)
        docs.update(_section(data, "docs", dict))

        # Site roles override the archetypes of the same name
        roles = dict(DEFAULT_ROLES)
        roles.update(_section(data, "roles", dict))

        return cls(
            config=config,
            languages=_section(data, "languages", dict) or dict(DEFAULT_LANGUAGES),
            strings=_section(data, "strings", dict),
            docs=docs,
            upload=_section(data, "upload", dict),
            categories=_section(data, "categories", list),
            courses=_section(data, "courses", list),
            modules=_section(data, "modules", list),
            users=_section(data, "users", list),
            roles=roles,
            assignments=_section(data, "assignments", list),
            ai=_section(data, "ai", dict),
            _raw=data,
        )

    @classmethod
    def load(cls, path: Path) -> "SiteConfig":
        """Load site config from YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SiteConfigError(f"Cannot parse {path}: {e}")
        if not isinstance(data, dict):
            raise SiteConfigError(f"{path} must contain a mapping")
        print(f"[Site] Loaded from {path}", file=sys.stderr)
        return cls.from_dict(data)

    def get_user(self, user_id: int) -> User:
        """Look up a user by id.

        Raises:
            NotFoundError: If no such user
        """
        for entry in self.users:
            if entry.get("id") == user_id:
                return User(
                    id=entry["id"],
                    username=entry.get("username", f"user{user_id}"),
                    lang=entry.get("lang", "en"),
                    is_admin=bool(entry.get("admin", False)),
                )
        raise NotFoundError(f"User {user_id} does not exist")


class SiteConfigStore(ConfigStore):
    def __init__(self, site: SiteConfig):
        self._site = site

    def get(self, namespace: str, key: str) -> Optional[str]:
        return _to_text(self._site.config.get(namespace, {}).get(key))


class SitePluginManager(PluginManager):
    """A plugin is enabled unless tiny_<name>/disabled is set."""

    def __init__(self, config: ConfigStore):
        self._config = config

    def is_enabled(self, plugin_name: str) -> bool:
        return not self._config.get_bool(f"tiny_{plugin_name}", "disabled")


class SiteContextResolver(ContextResolver):
    """Builds the context tree from categories, courses and modules.

    Context ids are handed out in file order: the system context first,
    then categories, courses and modules.
    """

    def __init__(self, site: SiteConfig):
        self._contexts: dict[tuple[str, int], Context] = {}
        self._build(site)

    def _add(self, level: str, instance_id: int, parent: Optional[Context]) -> Context:
        context_id = SYSTEM_CONTEXT_ID + len(self._contexts)
        path = (parent.path if parent else ()) + (context_id,)
        context = Context(id=context_id, level=level, instance_id=instance_id, path=path)
        self._contexts[(level, instance_id)] = context
        return context

    def _parent(self, level: str, instance_id: Optional[int], child: str) -> Context:
        if instance_id is None:
            return self._contexts[("system", 0)]
        parent = self._contexts.get((level, instance_id))
        if parent is None:
            raise SiteConfigError(f"{child} refers to unknown {level} {instance_id}")
        return parent

    def _build(self, site: SiteConfig) -> None:
        self._add("system", 0, None)
        for category in site.categories:
            parent = self._parent("coursecat", category.get("parent"), f"category {category['id']}")
            self._add("coursecat", category["id"], parent)
        for course in site.courses:
            parent = self._parent("coursecat", course.get("category"), f"course {course['id']}")
            self._add("course", course["id"], parent)
        for module in site.modules:
            parent = self._parent("course", module.get("course"), f"module {module['id']}")
            self._add("module", module["id"], parent)

    def resolve(self, context_type: str, instance_id: int) -> Context:
        if context_type not in CONTEXT_LEVELS:
            raise InvalidContextError(f"Unknown context type: {context_type}")
        if context_type == "system":
            return self._contexts[("system", 0)]
        context = self._contexts.get((context_type, instance_id))
        if context is None:
            raise NotFoundError(f"No {context_type} with id {instance_id}")
        return context


class SitePermissionChecker(PermissionChecker):
    """Role assignments on a context apply to every context below it."""

    def __init__(self, site: SiteConfig, contexts: SiteContextResolver):
        self._roles = site.roles
        self._assignments: dict[int, list[tuple[int, str]]] = {}  # user -> [(context id, role)]
        for entry in site.assignments:
            level = entry.get("context", "system")
            context = contexts.resolve(level, entry.get("instance", 0))
            role = entry["role"]
            if role not in self._roles:
                raise SiteConfigError(f"Assignment refers to unknown role '{role}'")
            self._assignments.setdefault(entry["user"], []).append((context.id, role))

    def roles_in_context(self, user: User, context: Context) -> list[str]:
        return [
            role
            for context_id, role in self._assignments.get(user.id, [])
            if context_id in context.path
        ]

    def has_capability(self, user: User, capability: str, context: Context) -> bool:
        if user.is_admin:
            return True
        return any(
            capability in self._roles.get(role, [])
            for role in self.roles_in_context(user, context)
        )

    def can_access(self, user: User, context: Context) -> bool:
        if user.is_admin or context.level == "system":
            return True
        return bool(self.roles_in_context(user, context))


class SiteLanguageCatalog(LanguageCatalog):
    def __init__(self, site: SiteConfig):
        self._languages = site.languages
        self._strings = {k: dict(v) for k, v in DEFAULT_STRINGS.items()}
        for component, strings in site.strings.items():
            self._strings.setdefault(component, {}).update(strings)
        self._docs = site.docs

    def list_installed_translations(self) -> list[tuple[str, str]]:
        return list(self._languages.items())

    def get_string(self, identifier: str, component: str) -> str:
        return self._strings.get(component, {}).get(identifier, f"[[{identifier}]]")

    def get_docs_url(self, page: str) -> str:
        docs = self._docs
        return f"{docs['root'].rstrip('/')}/{docs['branch']}/{docs['lang']}/{page}"


class SiteUploadLimits(UploadLimitService):
    """Smallest non-zero limit of server, site, course and module."""

    def __init__(self, site: SiteConfig, contexts: SiteContextResolver):
        self._server = int(site.upload.get("server_limit", DEFAULT_SERVER_UPLOAD_LIMIT))
        self._site = int(site.upload.get("maxbytes", 0))
        self._by_context: dict[int, int] = {}
        for level, entries in (("course", site.courses), ("module", site.modules)):
            for entry in entries:
                context = contexts.resolve(level, entry["id"])
                self._by_context[context.id] = int(entry.get("maxbytes", 0))

    def max_upload_size(self, context: Context) -> int:
        limits = [self._server, self._site]
        limits.extend(self._by_context.get(cid, 0) for cid in context.path)
        limits = [limit for limit in limits if limit > 0]
        return min(limits) if limits else 0


class SiteAIManager(AIManager):
    def __init__(self, site: SiteConfig):
        self._providers = site.ai.get("providers") or []
        self._policy_agreed = set(site.ai.get("policy_agreed") or [])

    def is_action_available(self, action: str) -> bool:
        return any(
            provider.get("enabled", False)
            and provider.get("actions", {}).get(action, False)
            for provider in self._providers
        )

    def user_policy_status(self, user: User) -> bool:
        return user.id in self._policy_agreed


def build_site(site_config: SiteConfig) -> Site:
    """Wire the YAML-backed collaborators together."""
    contexts = SiteContextResolver(site_config)
    config = SiteConfigStore(site_config)
    return Site(
        contexts=contexts,
        config=config,
        plugins=SitePluginManager(config),
        permissions=SitePermissionChecker(site_config, contexts),
        languages=SiteLanguageCatalog(site_config),
        uploads=SiteUploadLimits(site_config, contexts),
        ai=SiteAIManager(site_config),
    )


def find_site_path(explicit_path: Optional[str] = None) -> Path:
    """Find the site file: explicit path, ./tinyconf.yml, ~/.tinyconf/tinyconf.yml."""
    if explicit_path:
        return Path(explicit_path)

    local_config = Path("tinyconf.yml")
    if local_config.exists():
        return local_config

    return Path.home() / ".tinyconf" / "tinyconf.yml"
