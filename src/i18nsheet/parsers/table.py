"""Multi-language tables: one row per key path, one column per language."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence

from i18nsheet.parsers.keypath import KeyPathError, decode, encode
from i18nsheet.parsers.tree import FlatEntry, Node, flatten, scalar_text

log = logging.getLogger("i18nsheet.table")

KEY_HEADER = "Key"


@dataclass
class KeyAccumulator:
    """Values of one namespace, collected language by language.

    Row order is the order in which key paths were first seen.
    """
    language_count: int
    values: dict[tuple[str, ...], list[Optional[str]]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.values)

    def set_value(self, path: tuple[str, ...], value: str, position: int) -> None:
        if not 0 <= position < self.language_count:
            raise IndexError(f"Language position {position} out of range 0..{self.language_count - 1}")
        slots = self.values.get(path)
        if slots is None:
            slots = [None] * self.language_count
            self.values[path] = slots
        slots[position] = value

    def add(self, entries: Iterable[FlatEntry], position: int) -> int:
        """Store *entries* for the language at *position*; returns the count."""
        count = 0
        for entry in entries:
            self.set_value(entry.path, entry.value, position)
            count += 1
        return count


def flatten_into(tree: Node, position: int, accumulator: KeyAccumulator) -> int:
    """Flatten *tree* into *accumulator* for the language at *position*.

    The tree is flattened completely before anything is stored, so a tree
    with an unencodable key leaves the accumulator untouched.
    """
    entries = list(flatten(tree))
    return accumulator.add(entries, position)


@dataclass
class Row:
    """A key path and its value in each language."""
    key: str
    values: list[str]

    def as_list(self) -> list[str]:
        return [self.key, *self.values]


@dataclass
class Table:
    """All rows of one namespace."""
    namespace: str
    header: list[str]
    rows: list[Row] = field(default_factory=list)

    def as_lists(self) -> list[list[str]]:
        return [list(self.header)] + [r.as_list() for r in self.rows]


def build_table(namespace: str, accumulator: KeyAccumulator, labels: Sequence[str]) -> Table:
    """Turn an accumulator into a table; unset values become empty strings."""
    if len(labels) != accumulator.language_count:
        raise ValueError(
            f"{namespace}: {len(labels)} labels for {accumulator.language_count} languages"
        )
    table = Table(namespace=namespace, header=[KEY_HEADER, *labels])
    for path, slots in accumulator.values.items():
        table.rows.append(Row(encode(path), ["" if v is None else v for v in slots]))
    return table


def build_tables(accumulators: Mapping[str, KeyAccumulator], labels: Sequence[str]) -> dict[str, Table]:
    """Build one table per namespace, keeping namespace order."""
    return {ns: build_table(ns, acc, labels) for ns, acc in accumulators.items()}


# ── Reading tables back ───────────────────────────────────────────

@dataclass
class SheetData:
    """Translations read from one table, per language label."""
    namespace: str
    languages: list[str] = field(default_factory=list)
    translations: dict[str, dict[tuple[str, ...], str]] = field(default_factory=dict)
    skipped_rows: int = 0

    def entries_for(self, language: str) -> dict[tuple[str, ...], str]:
        return self.translations.get(language, {})


def detect_language_count(header: Sequence[Any]) -> int:
    """Number of consecutive non-empty header cells after the key column."""
    count = 0
    for cell in header[1:]:
        if not scalar_text(cell).strip():
            break
        count += 1
    return count


def parse_rows(rows: Iterable[Sequence[Any]], namespace: str,
               language_count: Optional[int] = None) -> SheetData:
    """Read table rows (header first) into per-language key/value mappings.

    Columns ``2..language_count + 1`` are read as languages. With no
    *language_count* the count is taken from the header row. Rows without a
    key are skipped for every language.
    """
    data = SheetData(namespace=namespace)
    it = iter(rows)
    header = next(it, None)
    if header is None:
        return data

    detected = detect_language_count(header)
    if language_count is None:
        language_count = detected
    elif language_count != detected:
        log.warning("%s: %d languages requested, header has %d",
                    namespace, language_count, detected)

    columns: list[tuple[int, str]] = []
    for col in range(1, language_count + 1):
        label = scalar_text(header[col]).strip() if col < len(header) else ""
        if not label:
            log.warning("%s: column %d has no language label, skipped", namespace, col + 1)
            continue
        if label in data.translations:
            log.warning("%s: duplicate language column %r in column %d, skipped",
                        namespace, label, col + 1)
            continue
        data.languages.append(label)
        columns.append((col, label))
        data.translations[label] = {}

    for row_number, row in enumerate(it, start=2):
        key = scalar_text(row[0]).strip() if row else ""
        if not key:
            continue
        try:
            path = decode(key)
        except KeyPathError as e:
            log.warning("%s: row %d skipped: %s", namespace, row_number, e)
            data.skipped_rows += 1
            continue
        for col, label in columns:
            value = row[col] if col < len(row) else None
            data.translations[label][path] = scalar_text(value)
    return data
