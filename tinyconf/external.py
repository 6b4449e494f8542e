"""Remote-callable entry point for the editor configuration.

execute() is what the editor bootstrap calls: it resolves and checks
the context, builds the configuration and returns it as a nested,
JSON-compatible dict.
"""

from typing import Any, Optional

from .interfaces import (
    ConfigurationResponse,
    ContextAccessError,
    InvalidResponseError,
    Site,
    User,
)
from .manager import get_configuration_for_context
from .plugins import PluginRegistry

# Declared shape of the payload returned by execute()
RETURN_STRUCTURE = {
    "contextid": int,
    "branding": bool,
    "extendedvalidelements": str,
    "installedlanguages": [{"lang": str, "name": str}],
    "plugins": [
        {
            "name": str,
            "settings": [{"name": str, "value": str}],
        }
    ],
}


def get_configuration(
    site: Site,
    context_type: str,
    context_id: int,
    user: User,
    registry: Optional[PluginRegistry] = None,
) -> ConfigurationResponse:
    """Build the editor configuration for a user in a context.

    Args:
        site: Collaborators to read from
        context_type: "system", "coursecat", "course" or "module"
        context_id: Instance id of the course, category or module
        user: User the editor is for
        registry: Plugin table (defaults to the global registry)

    Returns:
        ConfigurationResponse

    Raises:
        InvalidContextError: Unknown context type
        NotFoundError: No such instance
        ContextAccessError: User may not use the context
    """
    context = site.contexts.resolve(context_type, context_id)
    if not site.permissions.can_access(user, context):
        raise ContextAccessError(
            f"User {user.id} cannot access {context_type} {context_id}"
        )
    return get_configuration_for_context(site, context, user, registry)


def execute(
    site: Site,
    context_type: str,
    context_id: int,
    user: User,
    registry: Optional[PluginRegistry] = None,
) -> dict:
    """get_configuration() serialized for the wire."""
    response = get_configuration(site, context_type, context_id, user, registry)
    return response.to_dict()


def _clean(value: Any, structure: Any, path: str) -> Any:
    if isinstance(structure, dict):
        if not isinstance(value, dict):
            raise InvalidResponseError(f"{path or 'payload'}: expected an object")
        cleaned = {}
        for key, inner in structure.items():
            if key not in value:
                raise InvalidResponseError(f"{path}{key}: missing")
            cleaned[key] = _clean(value[key], inner, f"{path}{key}.")
        return cleaned

    if isinstance(structure, list):
        if not isinstance(value, (list, tuple)):
            raise InvalidResponseError(f"{path.rstrip('.')}: expected a list")
        return [
            _clean(item, structure[0], f"{path}{index}.")
            for index, item in enumerate(value)
        ]

    name = path.rstrip(".")
    if structure is bool:
        if isinstance(value, bool):
            return value
        if value in (0, 1, "0", "1"):
            return bool(int(value))
        raise InvalidResponseError(f"{name}: expected a boolean")
    if structure is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidResponseError(f"{name}: expected an integer")
        return value
    if not isinstance(value, str):
        raise InvalidResponseError(f"{name}: expected text")
    return value


def clean_return_value(payload: dict, structure: Optional[dict] = None) -> dict:
    """Check a payload against the declared return structure.

    Unknown keys are dropped; missing keys and wrong types raise.

    Raises:
        InvalidResponseError: If the payload does not match
    """
    return _clean(payload, structure or RETURN_STRUCTURE, "")
