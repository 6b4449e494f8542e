"""Collaborator interfaces for the configuration aggregator.

The aggregator never talks to the site directly. Everything it needs
(contexts, permissions, settings, languages, upload limits, AI state)
comes through these narrow interfaces, so tests and the YAML-backed
site can be swapped freely.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


# --- Errors ---


class ExternalError(Exception):
    """Structured failure returned to the caller.

    Carries a machine-readable kind next to the human message.
    """

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"errorcode": self.kind, "message": self.message}


class InvalidContextError(ExternalError):
    """Context type is not one we know about."""

    kind = "invalidcontext"


class NotFoundError(ExternalError):
    """Context id does not resolve to an existing context."""

    kind = "notfound"


class ContextAccessError(ExternalError, PermissionError):
    """User may not read configuration in this context at all."""

    kind = "nopermission"


class InvalidResponseError(ExternalError):
    """Payload does not match the declared return structure."""

    kind = "invalidresponse"


# --- Site objects ---

CONTEXT_LEVELS = ("system", "coursecat", "course", "module")


@dataclass(frozen=True)
class Context:
    """A scope under which permissions and settings are evaluated."""

    id: int
    level: str
    instance_id: int
    path: tuple[int, ...] = ()  # Context ids from system down to self

    @property
    def parent_ids(self) -> tuple[int, ...]:
        return self.path[:-1]


@dataclass(frozen=True)
class User:
    """The user a configuration is being built for."""

    id: int
    username: str
    lang: str = "en"
    is_admin: bool = False


@dataclass(frozen=True)
class Setting:
    """One name/value pair. Values are always text."""

    name: str
    value: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class PluginBlock:
    """Settings contributed by one editor plugin."""

    name: str
    settings: tuple[Setting, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "settings": [s.to_dict() for s in self.settings],
        }


@dataclass(frozen=True)
class Language:
    lang: str
    name: str

    def to_dict(self) -> dict:
        return {"lang": self.lang, "name": self.name}


@dataclass(frozen=True)
class ConfigurationResponse:
    """Everything the editor needs to boot in one context."""

    contextid: int
    branding: bool
    extendedvalidelements: str
    installedlanguages: tuple[Language, ...] = ()
    plugins: tuple[PluginBlock, ...] = ()

    @property
    def plugin_names(self) -> list[str]:
        return [p.name for p in self.plugins]

    def to_dict(self) -> dict:
        return {
            "contextid": self.contextid,
            "branding": self.branding,
            "extendedvalidelements": self.extendedvalidelements,
            "installedlanguages": [lang.to_dict() for lang in self.installedlanguages],
            "plugins": [p.to_dict() for p in self.plugins],
        }


# --- Collaborators ---


class ContextResolver(ABC):
    """Turns (context type, instance id) into a Context."""

    @abstractmethod
    def resolve(self, context_type: str, instance_id: int) -> Context:
        """Resolve a context.

        Raises:
            InvalidContextError: If context_type is unknown
            NotFoundError: If no such instance exists
        """
        pass


class ConfigStore(ABC):
    """Key-value configuration store, grouped by namespace."""

    @abstractmethod
    def get(self, namespace: str, key: str) -> Optional[str]:
        """Get a setting as text, or None when it is not set."""
        pass

    def get_bool(self, namespace: str, key: str, default: bool = False) -> bool:
        value = self.get(namespace, key)
        if value is None:
            return default
        return value.strip().lower() not in ("", "0", "false", "no", "off")


class PluginManager(ABC):
    """Reports whether an editor plugin is switched on site-wide."""

    @abstractmethod
    def is_enabled(self, plugin_name: str) -> bool:
        pass


class PermissionChecker(ABC):
    """Capability checks for a user in a context."""

    @abstractmethod
    def has_capability(self, user: User, capability: str, context: Context) -> bool:
        pass

    @abstractmethod
    def can_access(self, user: User, context: Context) -> bool:
        """Whether the user may use the context at all."""
        pass


class LanguageCatalog(ABC):
    """Installed translations and string lookup."""

    @abstractmethod
    def list_installed_translations(self) -> list[tuple[str, str]]:
        """Return (code, display name) pairs in catalogue order."""
        pass

    @abstractmethod
    def get_string(self, identifier: str, component: str) -> str:
        pass

    def get_docs_url(self, page: str) -> str:
        """Link to a documentation page."""
        return page


class UploadLimitService(ABC):
    @abstractmethod
    def max_upload_size(self, context: Context) -> int:
        """Largest file upload allowed in the context, in bytes."""
        pass


class AIManager(ABC):
    """AI provider and action state."""

    @abstractmethod
    def is_action_available(self, action: str) -> bool:
        """Whether any enabled provider has the action enabled."""
        pass

    @abstractmethod
    def user_policy_status(self, user: User) -> bool:
        """Whether the user has accepted the AI usage policy."""
        pass


@dataclass
class Site:
    """Bundle of collaborators handed to the aggregator."""

    contexts: ContextResolver
    config: ConfigStore
    plugins: PluginManager
    permissions: PermissionChecker
    languages: LanguageCatalog
    uploads: UploadLimitService
    ai: AIManager
