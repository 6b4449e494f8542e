"""RecordRTC plugin exports."""

from .plugin import DEFAULTS, RecordRTCPlugin, create_plugin, split_screensize

__all__ = ["DEFAULTS", "RecordRTCPlugin", "create_plugin", "split_screensize"]
