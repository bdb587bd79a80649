"""Shared fixtures for i18nsheet tests."""
import sys
from pathlib import Path

import pytest

# Ensure src is on path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES


@pytest.fixture
def translations_dir(tmp_path):
    """A writable copy of the fixture translation folders."""
    import shutil
    dest = tmp_path / "translations"
    shutil.copytree(FIXTURES / "translations", dest)
    return dest


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Never touch the real settings file."""
    settings_file = tmp_path / "config" / "settings.json"
    monkeypatch.setattr("i18nsheet.services.settings._SETTINGS_FILE", settings_file)
    from i18nsheet.services.settings import Settings
    Settings.reset_instance()
    yield settings_file
    Settings.reset_instance()
