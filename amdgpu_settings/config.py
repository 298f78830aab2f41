#!/usr/bin/env python3
"""
Configuration manager for amdgpu-settings.

Handles loading and accessing tool settings from an optional YAML file.
Every setting has a default, so the tool runs without a config file.

Example config.yaml:

    drm_root: /sys/class/drm
    default_profile: /etc/default/amdgpu-settings.config0
    log_file: /var/log/amdgpu-settings.log
    log_level: INFO
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml

DEFAULT_PROFILE = "/etc/default/amdgpu-settings.config0"


def config_search_paths() -> List[Path]:
    """Locations searched for config.yaml, in order."""
    return [
        Path.cwd() / "config.yaml",
        Path("/etc/amdgpu-settings/config.yaml"),
        Path.home() / ".config/amdgpu-settings/config.yaml",
    ]


def find_config_file(specified_path: Optional[str] = None) -> Optional[str]:
    """
    Find the configuration file.

    An explicitly specified path wins; otherwise the first existing entry of
    config_search_paths() is returned, or None.
    """
    if specified_path:
        return specified_path

    for path in config_search_paths():
        if path.exists():
            return str(path)
    return None


class ConfigManager:
    """
    Manages loading and accessing configuration from YAML file.
    Values missing from the file fall back to built-in defaults.
    """

    _instance = None

    def __new__(cls, config_path=None):
        """Singleton pattern to ensure only one config instance exists."""
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path=None):
        """Initialize the configuration manager with a config file path."""
        if self._initialized:
            return

        self.config_path = config_path
        self._config = {}

        if config_path:
            self.reload()

        self._initialized = True

    def reload(self) -> None:
        """Reload configuration from YAML file."""
        if not self.config_path or not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ValueError(f"Error loading configuration: {str(e)}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Error loading configuration: expected a mapping in {self.config_path}")
        self._config = data

    @property
    def drm_root(self) -> str:
        """Root of the DRM class directory holding card<N> entries."""
        return self._config.get("drm_root", "/sys/class/drm")

    @property
    def default_profile(self) -> str:
        """Profile used by 'set' when none is given."""
        return self._config.get("default_profile", DEFAULT_PROFILE)

    @property
    def log_file(self) -> Optional[str]:
        """Log file, or None to log to the console only."""
        return self._config.get("log_file")

    @property
    def log_level(self) -> str:
        """Logging level name."""
        return self._config.get("log_level", "INFO")
