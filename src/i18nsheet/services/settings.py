"""Settings service: load/save ~/.config/i18nsheet/settings.json."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

log = logging.getLogger("i18nsheet.settings")

_SETTINGS_FILE = Path.home() / ".config" / "i18nsheet" / "settings.json"

DEFAULTS: dict[str, Any] = {
    # Folders (relative to the working directory)
    "translations_dir": "translations",
    "results_dir": "results",
    "excels_dir": "excels",

    # Output
    "workbook_name": "translations.xlsx",
    "json_indent": 2,
    "csv_encoding": "utf-8",
    "style_workbook": True,

    # Console
    "show_progress": True,
}


class Settings:
    """Application settings backed by a JSON file."""

    _instance: Settings | None = None

    def __init__(self):
        self._data: dict[str, Any] = dict(DEFAULTS)
        self._load()

    @classmethod
    def get(cls) -> Settings:
        if cls._instance is None:
            cls._instance = Settings()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        cls._instance = None

    # ── Public API ────────────────────────────────────────────────

    def __getitem__(self, key: str) -> Any:
        return self._data.get(key, DEFAULTS.get(key))

    def __setitem__(self, key: str, value: Any):
        self._data[key] = value

    def get_value(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default if default is not None else DEFAULTS.get(key))

    def set_value(self, key: str, value: Any):
        self._data[key] = value

    def save(self):
        _SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        _SETTINGS_FILE.write_text(
            json.dumps(self._data, ensure_ascii=False, indent=2), "utf-8"
        )

    # ── Convenience properties ────────────────────────────────────

    @property
    def translations_dir(self) -> Path:
        return Path(self["translations_dir"])

    @property
    def results_dir(self) -> Path:
        return Path(self["results_dir"])

    @property
    def excels_dir(self) -> Path:
        return Path(self["excels_dir"])

    # ── Private ───────────────────────────────────────────────────

    def _load(self):
        if not _SETTINGS_FILE.exists():
            return
        try:
            stored = json.loads(_SETTINGS_FILE.read_text("utf-8"))
        except (OSError, ValueError) as e:
            log.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_FILE, e)
            return
        if isinstance(stored, dict):
            self._data.update(stored)
        else:
            log.warning("Ignoring settings file %s: expected a JSON object", _SETTINGS_FILE)
