"""H5P plugin - embed and upload interactive H5P content."""

from ..base import Plugin, PluginMeta, SettingsRequest, flag
from ...interfaces import Setting

EMBED_CAPABILITY = "tiny/h5p:addembed"
DEPLOY_CAPABILITY = "moodle/h5p:deploy"


class H5PPlugin(Plugin):
    meta = PluginMeta(
        id="h5p",
        version="1.0.0",
        capabilities=[EMBED_CAPABILITY],
    )

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        return [
            Setting("embedallowed", flag(request.has_capability(EMBED_CAPABILITY))),
            Setting("uploadallowed", flag(request.has_capability(DEPLOY_CAPABILITY))),
        ]


def create_plugin() -> H5PPlugin:
    return H5PPlugin()
