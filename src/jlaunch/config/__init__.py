"""Configuration management for jlaunch."""

from .parser import (
    LaunchConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "LaunchConfig",
    "load_config",
    "find_config_file",
]
