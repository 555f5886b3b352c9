"""Shared fixtures for the LHQ editor tree tests.

The sample model used across the suite::

    Strings (model, languages en/fr/de, primary fr)
    ├── Messages
    │   ├── Nested
    │   │   └── Deep
    │   ├── Error
    │   ├── ErrorDetail
    │   └── Warning
    ├── Labels
    │   ├── Title
    │   └── Cancel
    ├── Empty
    └── AppName
"""

import logging
import sys
from pathlib import Path

import pytest

# Make the repository root importable when running pytest from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from lhq_editor.config import ConfigManager
from lhq_editor.core.context import set_app_context
from lhq_editor.core.models import RootModelElement

logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and drop process-wide state."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("LHQ_EDITOR_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    set_app_context(None)
    yield config_dir
    ConfigManager.reset()
    set_app_context(None)


@pytest.fixture
def sample_root():
    root = RootModelElement("Strings", languages=["en", "fr", "de"], primary_language="fr")

    messages = root.add_category("Messages")
    nested = messages.add_category("Nested")
    nested.add_resource("Deep")
    error = messages.add_resource("Error")
    error.set_value("en", "Something failed")
    error.set_value("fr", "Echec de l'operation")
    detail = messages.add_resource("ErrorDetail")
    detail.set_value("en", "Details follow")
    messages.add_resource("Warning")

    labels = root.add_category("Labels")
    title = labels.add_resource("Title")
    title.set_value("en", "Main window")
    title.set_value("de", "Hauptfenster")
    labels.add_resource("Cancel")

    root.add_category("Empty")
    app_name = root.add_resource("AppName")
    app_name.set_value("en", "Editor")
    return root


@pytest.fixture
def published():
    """Recorder usable as an AppContext publisher."""
    calls = []

    def _publish(key, value):
        calls.append((key, value))

    _publish.calls = calls
    return _publish


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    path = tmp_path / "logs"
    monkeypatch.setenv("LHQ_EDITOR_LOG_DIR", str(path))
    return path

