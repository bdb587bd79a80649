"""Import: XLSX workbooks → one JSON file per language and worksheet.

``excels/app.xlsx`` with worksheets ``common`` and ``errors`` and language
columns ``en``/``es`` is written as::

    results/app/en/common.json
    results/app/en/errors.json
    results/app/es/common.json
    results/app/es/errors.json

The ``results/app`` folder is recreated on every run.
"""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from tqdm import tqdm

from i18nsheet.parsers.json_parser import JSONFileData, save_json
from i18nsheet.parsers.table import SheetData
from i18nsheet.parsers.tree import unflatten
from i18nsheet.parsers.xlsx import read_workbook
from i18nsheet.services import Failure

log = logging.getLogger("i18nsheet.import")

_UNSAFE_NAME = re.compile(r'[\\/:*?"<>|]')

LanguageCountFunc = Callable[[Path], Optional[int]]


@dataclass
class ImportResult:
    written: list[Path] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _safe_name(name: str) -> str:
    return _UNSAFE_NAME.sub("_", name).strip() or "_"


def list_workbooks(root: str | Path) -> list[Path]:
    """``.xlsx`` files directly under *root*, sorted; Excel lock files are skipped."""
    root = Path(root)
    try:
        return sorted(
            p for p in root.iterdir()
            if p.is_file() and p.suffix.lower() == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        log.error("Cannot read workbooks folder %s: %s", root, e)
        return []


def write_sheet(sheet: SheetData, out_dir: Path, indent: int = 2) -> tuple[list[Path], list[Failure]]:
    """Write ``<out_dir>/<language>/<namespace>.json`` for each language of *sheet*."""
    written: list[Path] = []
    failures: list[Failure] = []
    if not sheet.languages:
        log.warning("%s: no language columns, nothing written", sheet.namespace)
    for language in sheet.languages:
        path = out_dir / _safe_name(language) / f"{_safe_name(sheet.namespace)}.json"
        try:
            tree = unflatten(sheet.entries_for(language))
            written.append(save_json(JSONFileData(path=path, tree=tree), indent=indent))
        except (ValueError, OSError) as e:
            log.error("%s [%s]: %s", sheet.namespace, language, e)
            failures.append(Failure(f"{sheet.namespace} [{language}]", str(e)))
    return written, failures


def convert_workbook(path: str | Path, results_dir: str | Path,
                     language_count: Optional[int] = None, indent: int = 2) -> ImportResult:
    """Convert every worksheet of one workbook into ``results_dir/<workbook>/``."""
    path = Path(path)
    result = ImportResult()
    try:
        sheets = read_workbook(path, language_count)
    except (ValueError, OSError) as e:
        log.error("Error while processing %s: %s", path, e)
        result.failures.append(Failure(str(path), str(e)))
        return result

    out_dir = Path(results_dir) / _safe_name(path.stem)
    try:
        if out_dir.exists():
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True)
    except OSError as e:
        log.error("Cannot prepare %s: %s", out_dir, e)
        result.failures.append(Failure(str(out_dir), str(e)))
        return result

    for sheet in sheets:
        written, failures = write_sheet(sheet, out_dir, indent)
        result.written.extend(written)
        result.failures.extend(failures)
    log.info("%s: %d files written to %s", path.name, len(result.written), out_dir)
    return result


def import_workbooks(excels_dir: str | Path, results_dir: str | Path,
                     language_count: Optional[LanguageCountFunc] = None, *,
                     indent: int = 2, show_progress: bool = True) -> ImportResult:
    """Convert all workbooks in *excels_dir*.

    *language_count* is asked once per workbook; returning ``None`` reads the
    count from the header row.
    """
    total = ImportResult()
    workbooks = list_workbooks(excels_dir)
    if not workbooks:
        log.warning("No .xlsx files found in %s", excels_dir)

    for path in tqdm(workbooks, desc="Converting workbooks", unit="file", disable=not show_progress):
        count = language_count(path) if language_count else None
        result = convert_workbook(path, results_dir, count, indent)
        total.written.extend(result.written)
        total.failures.extend(result.failures)
    return total
