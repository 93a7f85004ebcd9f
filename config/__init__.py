"""Runtime configuration for the synthetic mind."""

from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
