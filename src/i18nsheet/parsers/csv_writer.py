"""CSV export of a namespace table."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from pathlib import Path

from i18nsheet.parsers.table import Table

DELIMITER = ","


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _quote_if_needed(value: str) -> str:
    if DELIMITER in value or '"' in value or "\n" in value or "\r" in value:
        return _quote(value)
    return value


def format_csv(table: Table) -> str:
    """Render *table*: plain header, then key plus quoted values per row."""
    lines = [DELIMITER.join(_quote_if_needed(h) for h in table.header)]
    for row in table.rows:
        cells = [_quote_if_needed(row.key)] + [_quote(v) for v in row.values]
        lines.append(DELIMITER.join(cells))
    return "\n".join(lines)


def save_csv(table: Table, path: str | Path, encoding: str = "utf-8") -> Path:
    """Write *table* to *path* and return it."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_csv(table), encoding=encoding)
    return out
