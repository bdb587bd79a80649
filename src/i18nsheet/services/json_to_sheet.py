"""Export: language folders of JSON files → CSV files and one XLSX workbook.

Layout read::

    translations/
        en/common.json
        es/common.json

Each ``<namespace>.json`` becomes ``results/<namespace>.csv`` and a worksheet
``<namespace>`` in ``results/translations.xlsx``. Languages keep the order
in which they were given for the whole run.
"""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from tqdm import tqdm

from i18nsheet.parsers.csv_writer import save_csv
from i18nsheet.parsers.json_parser import parse_json
from i18nsheet.parsers.table import KeyAccumulator, Table, build_tables, flatten_into
from i18nsheet.parsers.tree import Node
from i18nsheet.parsers.xlsx import write_workbook
from i18nsheet.services import Failure

log = logging.getLogger("i18nsheet.export")


@dataclass
class ExportContext:
    """State of one export run: language order, labels and per-namespace values."""
    languages: list[str]
    labels: dict[str, str] = field(default_factory=dict)
    accumulators: dict[str, KeyAccumulator] = field(default_factory=dict)

    def add_tree(self, namespace: str, tree: Node, position: int) -> int:
        """Flatten *tree* into the namespace's accumulator.

        A namespace is only registered once one of its trees was accepted.
        """
        acc = self.accumulators.get(namespace)
        if acc is None:
            acc = KeyAccumulator(language_count=len(self.languages))
        count = flatten_into(tree, position, acc)
        self.accumulators[namespace] = acc
        return count

    @property
    def header_labels(self) -> list[str]:
        return [self.labels.get(code) or code for code in self.languages]

    def tables(self) -> dict[str, Table]:
        return build_tables(self.accumulators, self.header_labels)


@dataclass
class ExportResult:
    tables: dict[str, Table] = field(default_factory=dict)
    written: list[Path] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def list_language_dirs(root: str | Path) -> list[str]:
    """Names of the language folders under *root*, sorted."""
    root = Path(root)
    try:
        return sorted(p.name for p in root.iterdir() if p.is_dir())
    except OSError as e:
        log.error("Cannot read translations folder %s: %s", root, e)
        return []


def list_json_files(folder: Path) -> list[Path]:
    return sorted(p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ".json")


def collect_translations(source_dir: str | Path, labels: Mapping[str, str],
                         show_progress: bool = True) -> tuple[ExportContext, list[Failure]]:
    """Read every language folder named in *labels* into a fresh context."""
    source_dir = Path(source_dir)
    context = ExportContext(languages=list(labels), labels=dict(labels))
    failures: list[Failure] = []

    languages = tqdm(context.languages, desc="Reading languages", unit="lang",
                     disable=not show_progress)
    for position, language in enumerate(languages):
        log.info("Reading %s translations...", language)
        folder = source_dir / language
        try:
            files = list_json_files(folder)
        except OSError as e:
            log.error("Cannot read %s: %s", folder, e)
            failures.append(Failure(str(folder), str(e)))
            continue

        for path in files:
            log.debug("Reading %s file...", path.name)
            try:
                data = parse_json(path)
                count = context.add_tree(data.namespace, data.tree, position)
            except (ValueError, OSError) as e:
                log.error("Error while reading %s: %s", path, e)
                failures.append(Failure(str(path), str(e)))
                continue
            log.debug("%s: %d keys", path, count)
    return context, failures


def write_outputs(context: ExportContext, results_dir: str | Path, *,
                  workbook_name: str = "translations.xlsx", styled: bool = True,
                  csv_encoding: str = "utf-8") -> ExportResult:
    """Write one CSV per namespace and the combined workbook."""
    results_dir = Path(results_dir)
    result = ExportResult(tables=context.tables())
    if not result.tables:
        log.warning("No translations found, nothing to write")
        return result

    for namespace, table in result.tables.items():
        log.info("Writing %s file...", namespace)
        try:
            result.written.append(save_csv(table, results_dir / f"{namespace}.csv", csv_encoding))
        except OSError as e:
            log.error("Cannot write %s.csv: %s", namespace, e)
            result.failures.append(Failure(f"{namespace}.csv", str(e)))

    workbook = results_dir / workbook_name
    try:
        result.written.append(write_workbook(result.tables.values(), workbook, styled=styled))
        log.info("Excel with all translations has been generated in %s", workbook)
    except (ValueError, OSError) as e:
        log.error("Cannot write %s: %s", workbook, e)
        result.failures.append(Failure(str(workbook), str(e)))
    return result


def export_translations(source_dir: str | Path, results_dir: str | Path,
                        labels: Mapping[str, str], *, workbook_name: str = "translations.xlsx",
                        styled: bool = True, csv_encoding: str = "utf-8",
                        show_progress: bool = True) -> ExportResult:
    """Run the whole export for the languages (code → label) in *labels*."""
    context, failures = collect_translations(source_dir, labels, show_progress)
    result = write_outputs(context, results_dir, workbook_name=workbook_name,
                           styled=styled, csv_encoding=csv_encoding)
    result.failures[:0] = failures
    log.info("All translations have been converted. You can find them in the %s folder.", results_dir)
    return result
