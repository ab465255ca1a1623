"""
Storage Layer.

This package handles reading the application's configuration file.
"""

from .config_manager import DEFAULT_CONFIG_FILE, ConfigManager

__all__ = ["DEFAULT_CONFIG_FILE", "ConfigManager"]
