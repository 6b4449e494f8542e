"""Premium plugin exports."""

from .plugin import PREMIUM_PLUGINS, PremiumPlugin, create_plugin

__all__ = ["PREMIUM_PLUGINS", "PremiumPlugin", "create_plugin"]
