"""Centralized configuration for the tessera service."""

from tessera_config.settings import Settings, clear_settings_cache, get_settings

__all__ = ["Settings", "clear_settings_cache", "get_settings"]
