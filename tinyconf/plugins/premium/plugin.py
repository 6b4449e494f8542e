"""Premium plugin - loads the licensed premium editor plugins.

Needs a site API key; each premium plugin is switched on separately.
"""

from ..base import Plugin, PluginMeta, SettingsRequest
from ...interfaces import Setting

ACCESS_CAPABILITY = "tiny/premium:accesspremium"

# Catalogue order is the order they are reported in
PREMIUM_PLUGINS = [
    "a11ychecker",
    "advcode",
    "advtable",
    "autocorrect",
    "casechange",
    "checklist",
    "editimage",
    "export",
    "footnotes",
    "formatpainter",
    "linkchecker",
    "pageembed",
    "permanentpen",
    "powerpaste",
    "tableofcontents",
    "tinycomments",
    "tinymcespellchecker",
    "typography",
]


class PremiumPlugin(Plugin):
    meta = PluginMeta(
        id="premium",
        version="1.0.0",
        capabilities=[ACCESS_CAPABILITY],
    )

    def is_available(self, request: SettingsRequest) -> bool:
        apikey = self.get_config(request, "apikey", "")
        return bool(apikey.strip())

    def get_enabled_plugins(self, request: SettingsRequest) -> list[str]:
        config = request.site.config
        return [
            name
            for name in PREMIUM_PLUGINS
            if config.get_bool(self.meta.namespace, f"{name}:enabled")
        ]

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return [Setting("premiumplugins", ",".join(self.get_enabled_plugins(request)))]


def create_plugin() -> PremiumPlugin:
    return PremiumPlugin()
