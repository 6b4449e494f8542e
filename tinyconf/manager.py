"""Editor configuration aggregation.

Walks the plugin registry in order and collects the settings of every
plugin the user can use in the context, next to the global editor
settings and the installed languages.
"""

from typing import Optional

from .interfaces import (
    ConfigurationResponse,
    Context,
    Language,
    PluginBlock,
    Site,
    User,
)
from .log import get_logger
from .plugins import PluginRegistry, SettingsRequest, get_registry

EDITOR_NAMESPACE = "editor_tiny"


def get_installed_languages(site: Site) -> tuple[Language, ...]:
    """Installed translations, in catalogue order."""
    return tuple(
        Language(lang=code, name=name)
        for code, name in site.languages.list_installed_translations()
    )


def get_plugin_configuration(
    site: Site,
    context: Context,
    user: User,
    registry: Optional[PluginRegistry] = None,
) -> tuple[PluginBlock, ...]:
    """Settings of every plugin the user may use in the context.

    A plugin is left out when it is disabled, when the user lacks all of
    its capabilities, or when its own availability check fails. Left-out
    plugins have none of their configuration read.

    Args:
        site: Collaborators to read from
        context: Resolved context
        user: User the editor is for
        registry: Plugin table (defaults to the global registry)

    Returns:
        Plugin blocks in registry order
    """
    registry = registry or get_registry()
    logger = get_logger()
    request = SettingsRequest(site=site, context=context, user=user)

    blocks = []
    for plugin in registry.all_plugins():
        if not plugin.is_enabled(site):
            logger.debug("config", f"Skipping disabled plugin: {plugin.name}")
            continue
        if not plugin.user_can_see(request):
            logger.debug(
                "config",
                f"Skipping {plugin.name}: missing capability",
                user=user.id,
                context=context.id,
            )
            continue
        if not plugin.is_available(request):
            logger.debug("config", f"Skipping unavailable plugin: {plugin.name}")
            continue

        settings = plugin.build_settings(request)
        blocks.append(PluginBlock(name=plugin.name, settings=tuple(settings)))

    return tuple(blocks)


def get_configuration_for_context(
    site: Site,
    context: Context,
    user: User,
    registry: Optional[PluginRegistry] = None,
) -> ConfigurationResponse:
    """Assemble the full editor configuration for an already checked context."""
    extended = site.config.get(EDITOR_NAMESPACE, "extended_valid_elements")
    response = ConfigurationResponse(
        contextid=context.id,
        branding=site.config.get_bool(EDITOR_NAMESPACE, "branding"),
        extendedvalidelements=extended or "",
        installedlanguages=get_installed_languages(site),
        plugins=get_plugin_configuration(site, context, user, registry),
    )
    get_logger().info(
        "config",
        f"Built configuration for context {context.id}",
        user=user.id,
        plugins=response.plugin_names,
    )
    return response
