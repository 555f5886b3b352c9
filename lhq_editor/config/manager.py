from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises the editor's declarative settings (languages group
visibility, search behaviour, context key names, logging). It loads YAML files
packaged with *lhq_editor* and optionally merges them with user overrides.

Override directory, first match wins:
``$LHQ_EDITOR_CONFIG_DIR``, then ``%LOCALAPPDATA%\\LhqEditor\\config`` on
Windows or ``~/.lhq_editor`` elsewhere.

Missing PyYAML falls back to empty sections so callers always get mappings.
"""

import logging
import os
from importlib import resources as pkg_resources
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]


def _get_user_config_dir() -> Path:
    """Get the user configuration directory."""
    override = os.environ.get("LHQ_EDITOR_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == "nt":
        local_appdata = os.environ.get("LOCALAPPDATA")
        if local_appdata:
            return Path(local_appdata) / "LhqEditor" / "config"
        return Path.home() / "AppData" / "Local" / "LhqEditor" / "config"
    return Path.home() / ".lhq_editor"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


class _Singleton(type):
    _instance: Optional["ConfigManager"] = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "editor": "editor.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_editor_config(self) -> Dict[str, Any]:
        return self._data.get("editor", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_languages_visible(self) -> bool:
        return bool(self.get_editor_config().get("languages_visible", True))

    def get_search_ignore_case(self) -> bool:
        search = self.get_editor_config().get("search") or {}
        return bool(search.get("ignore_case", True))

    def get_context_keys(self) -> Dict[str, str]:
        keys = self.get_editor_config().get("context_keys") or {}
        return {str(k): str(v) for k, v in keys.items()}

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return

        try:
            import yaml
        except ModuleNotFoundError:
            logger.warning("PyYAML not installed, falling back to built-in defaults")
            self._data = self._builtin_defaults()
            return

        startup_summary = []
        user_config_dir = _get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                packaged_data = yaml.safe_load(_read_packaged(filename)) or {}
                merged_cfg.update(packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))

    @staticmethod
    def _builtin_defaults() -> Dict[str, Dict[str, Any]]:
        return {
            "editor": {},
            "logging": {},
        }
