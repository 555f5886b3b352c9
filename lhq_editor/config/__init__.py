"""Configuration files (YAML) and the helpers reading them."""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
