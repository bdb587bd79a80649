"""i18nsheet command line entry point."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from i18nsheet import APP_NAME, __version__
from i18nsheet.services import prompts
from i18nsheet.services.json_to_sheet import export_translations, list_language_dirs
from i18nsheet.services.settings import Settings
from i18nsheet.services.sheet_to_json import import_workbooks

log = logging.getLogger("i18nsheet.app")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Convert JSON translation folders to CSV/XLSX and XLSX back to JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug messages")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Do not ask; use folder names as labels and detect language counts")
    parser.add_argument("--results", help="Output folder (default from settings: results)")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")

    sub = parser.add_subparsers(dest="command", required=True)
    exp = sub.add_parser("export", help="JSON language folders → CSV files and one XLSX workbook")
    exp.add_argument("--source", help="Folder with one sub-folder per language (default: translations)")
    exp.add_argument("--no-style", action="store_true", help="Write the workbook without formatting")

    imp = sub.add_parser("import", help="XLSX workbooks → JSON files per language")
    imp.add_argument("--source", help="Folder with .xlsx files (default: excels)")
    return parser


class I18nSheetApp:
    """Runs one command with settings and interactive questions."""

    def __init__(self, args: argparse.Namespace | list[str], settings: Optional[Settings] = None,
                 input_func: Optional[prompts.InputFunc] = None):
        if not isinstance(args, argparse.Namespace):
            args = build_parser().parse_args(args)
        self._args = args
        self._settings = settings or Settings.get()
        self._input = input_func

    def _results_dir(self) -> Path:
        return Path(self._args.results) if self._args.results else self._settings.results_dir

    def _show_progress(self) -> bool:
        return bool(self._settings["show_progress"]) and not self._args.no_progress

    def run(self) -> int:
        if self._args.command == "export":
            ok = self._export()
        else:
            ok = self._import()
        return 0 if ok else 1

    def _export(self) -> bool:
        source = Path(self._args.source) if self._args.source else self._settings.translations_dir
        codes = list_language_dirs(source)
        if not codes:
            log.error("No language folders found in %s", source)
            return False

        if self._args.yes:
            labels = {code: code for code in codes}
        else:
            labels = prompts.ask_language_labels(codes, self._input)

        result = export_translations(
            source, self._results_dir(), labels,
            workbook_name=self._settings["workbook_name"],
            styled=bool(self._settings["style_workbook"]) and not self._args.no_style,
            csv_encoding=self._settings["csv_encoding"],
            show_progress=self._show_progress(),
        )
        for failure in result.failures:
            log.warning("Skipped %s", failure)
        return result.ok

    def _import(self) -> bool:
        source = Path(self._args.source) if self._args.source else self._settings.excels_dir

        def language_count(path: Path) -> Optional[int]:
            if self._args.yes:
                return None
            return prompts.ask_language_count(path.name, self._input)

        result = import_workbooks(
            source, self._results_dir(), language_count,
            indent=int(self._settings["json_indent"]),
            show_progress=self._show_progress(),
        )
        for failure in result.failures:
            log.warning("Skipped %s", failure)
        return result.ok


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s: %(message)s")
    app = I18nSheetApp(args)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
