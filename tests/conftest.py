"""Shared fixtures for the string store tests."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def write_documents(root: Path, documents: dict):
    """Create module directories and documents.

    Args:
        root: Lang directory
        documents: {module: {filename: text}}; an empty dict creates an empty module
    """
    for module, files in documents.items():
        module_dir = root / module
        module_dir.mkdir(parents=True, exist_ok=True)
        for filename, content in files.items():
            (module_dir / filename).write_text(content, encoding="utf-8")


@pytest.fixture
def lang_root(tmp_path) -> Path:
    root = tmp_path / "lang"
    root.mkdir()
    return root


@pytest.fixture
def populated_root(lang_root) -> Path:
    """Two modules, two languages, with keys missing from some documents."""
    write_documents(lang_root, {
        "core": {
            "en.yml": 'hello: "Hi"\nbye: "Bye"\n',
            "es.yml": 'hello: "Hola"\nthanks: "Gracias"\n',
        },
        "shop": {
            "en.yml": 'buy: "Buy"\n',
        },
    })
    return lang_root


@pytest.fixture
def store(populated_root):
    from lang.string_store import StringStore
    return StringStore(populated_root, extension="yml", quote_values=True)


@pytest.fixture
def settings_manager(tmp_path):
    from utils.settings_manager import SettingsManager
    return SettingsManager(settings_file=tmp_path / "settings" / "settings.json")
