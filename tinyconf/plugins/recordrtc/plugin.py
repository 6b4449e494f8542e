"""RecordRTC plugin - record audio, video and screen straight into the editor.

Priority of values: site config, then the defaults below.
"""

from ..base import Plugin, PluginMeta, SettingsRequest, flag
from ...interfaces import Setting

DEFAULTS = {
    "allowedtypes": "both",
    "allowedpausing": "0",
    "audiobitrate": "128000",
    "videobitrate": "2500000",
    "screenbitrate": "2500000",
    "audiotimelimit": "120",
    "videotimelimit": "120",
    "screentimelimit": "120",
    "screensize": "1280,720",
}

# allowedtypes value -> recording types it permits
ALLOWED_TYPES = {
    "audio": {"audio"},
    "video": {"video"},
    "screen": {"screen"},
    "both": {"audio", "video"},
    "all": {"audio", "video", "screen"},
}

# Passed through unchanged, in this order
PASSTHROUGH = [
    "allowedtypes",
    "audiobitrate",
    "videobitrate",
    "screenbitrate",
    "audiotimelimit",
    "videotimelimit",
    "screentimelimit",
]


def split_screensize(value: str) -> tuple[str, str]:
    """Split a stored "width,height" pair.

    Extra parts after the height are ignored. Falls back to the default
    size when width or height is missing.
    """
    parts = [part.strip() for part in value.split(",")][:2]
    if len(parts) < 2 or not all(parts):
        parts = DEFAULTS["screensize"].split(",")
    return parts[0], parts[1]


class RecordRTCPlugin(Plugin):
    meta = PluginMeta(id="recordrtc", version="1.0.0")

    def _config(self, request: SettingsRequest, key: str) -> str:
        return self.get_config(request, key, DEFAULTS[key])

    def build_settings(self, request: SettingsRequest) -> list[Setting]:
        allowedtypes = self._config(request, "allowedtypes")
        types = ALLOWED_TYPES.get(allowedtypes, set())

        settings = [
            Setting("videoallowed", flag("video" in types)),
            Setting("audioallowed", flag("audio" in types)),
            Setting("screenallowed", flag("screen" in types)),
            Setting("pausingallowed", self._config(request, "allowedpausing")),
        ]
        settings.extend(Setting(key, self._config(request, key)) for key in PASSTHROUGH)

        maxrecsize = request.site.uploads.max_upload_size(request.context)
        settings.append(Setting("maxrecsize", str(maxrecsize)))

        width, height = split_screensize(self._config(request, "screensize"))
        settings.append(Setting("videoscreenwidth", width))
        settings.append(Setting("videoscreenheight", height))
        return settings


def create_plugin() -> RecordRTCPlugin:
    return RecordRTCPlugin()
