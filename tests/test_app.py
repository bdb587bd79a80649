"""Tests for interactive prompts and the command line app."""
import json

import pytest


def _answers(*values):
    it = iter(values)

    def ask(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return ask


class TestPrompts:
    def test_labels_default_to_code(self):
        from i18nsheet.services.prompts import ask_language_labels
        labels = ask_language_labels(["en", "es"], _answers("English", "  "))
        assert labels == {"en": "English", "es": "es"}

    def test_labels_keep_order(self):
        from i18nsheet.services.prompts import ask_language_labels
        assert list(ask_language_labels(["es", "en"], _answers("", ""))) == ["es", "en"]

    def test_number_retries(self, capsys):
        from i18nsheet.services.prompts import ask_number
        assert ask_number("How many?", _answers("two", "-1", "²", "3")) == 3
        assert "not a number" in capsys.readouterr().out

    def test_number_blank_is_none(self):
        from i18nsheet.services.prompts import ask_language_count
        assert ask_language_count("app.xlsx", _answers("")) is None

    def test_end_of_input(self):
        from i18nsheet.services.prompts import ask_number, ask_string
        assert ask_string("Label?", _answers()) == ""
        assert ask_number("Count?", _answers()) is None


class TestApp:
    def test_requires_command(self):
        from i18nsheet.app import build_parser
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_export_with_prompts(self, translations_dir, tmp_path):
        from i18nsheet.app import I18nSheetApp
        results = tmp_path / "results"
        app = I18nSheetApp(
            ["--results", str(results), "--no-progress", "export", "--source", str(translations_dir)],
            input_func=_answers("English", "Español"),
        )
        assert app.run() == 0
        assert (results / "common.csv").read_text("utf-8").splitlines()[0] == "Key,English,Español"
        assert (results / "translations.xlsx").exists()

    def test_export_uses_settings(self, translations_dir, tmp_path, monkeypatch):
        from i18nsheet.app import I18nSheetApp
        from i18nsheet.services.settings import Settings
        monkeypatch.chdir(tmp_path)
        settings = Settings.get()
        settings["workbook_name"] = "all.xlsx"
        app = I18nSheetApp(["--yes", "--no-progress", "export"], settings=settings)
        assert app.run() == 0
        assert (tmp_path / "results" / "all.xlsx").exists()
        assert (tmp_path / "results" / "menu.csv").exists()

    def test_export_without_languages(self, tmp_path):
        from i18nsheet.app import I18nSheetApp
        app = I18nSheetApp(["--yes", "export", "--source", str(tmp_path / "none")])
        assert app.run() == 1

    def test_import(self, translations_dir, tmp_path):
        from i18nsheet.app import I18nSheetApp
        results = tmp_path / "results"
        I18nSheetApp(["--yes", "--results", str(results), "--no-progress",
                      "export", "--source", str(translations_dir)]).run()
        excels = tmp_path / "excels"
        excels.mkdir()
        (results / "translations.xlsx").rename(excels / "strings.xlsx")

        app = I18nSheetApp(
            ["--results", str(tmp_path / "back"), "--no-progress", "import", "--source", str(excels)],
            input_func=_answers("2"),
        )
        assert app.run() == 0
        data = json.loads((tmp_path / "back" / "strings" / "es" / "common.json").read_text("utf-8"))
        assert data == {"common": {"bye": "Adiós", "hello": "Hola"}, "title": "Bienvenido"}

    def test_main_exit_code(self, tmp_path, monkeypatch):
        from i18nsheet import app
        monkeypatch.chdir(tmp_path)
        assert app.main(["--yes", "--no-progress", "import"]) == 0
