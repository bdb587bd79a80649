"""Excel workbook export/import: one worksheet per namespace."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path
from typing import Iterable, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException

from i18nsheet.parsers.table import SheetData, Table, parse_rows

log = logging.getLogger("i18nsheet.xlsx")

MAX_TITLE_LENGTH = 31
_INVALID_TITLE_CHARS = re.compile(r"[\\/*?:\[\]]")

_FONT = Font(name="Arial", size=12)
_KEY_FONT = Font(name="Arial", size=12, bold=True)
_HEADER_FONT = Font(name="Arial", size=12, bold=True, color="FF4C7CB2")
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD9E1F2")
_THIN = Side(style="thin", color="FF303030")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_ROW_HEIGHT = 20
_WIDTH_PADDING = 10


class WorkbookError(ValueError):
    """A workbook that cannot be read or has no worksheets."""


def sanitize_sheet_title(title: str, taken: Iterable[str] = ()) -> str:
    """Make *title* a valid, unused Excel worksheet title."""
    clean = _INVALID_TITLE_CHARS.sub("_", title).strip("'") or "Sheet"
    clean = clean[:MAX_TITLE_LENGTH]
    used = {t.lower() for t in taken}
    candidate = clean
    n = 2
    while candidate.lower() in used:
        suffix = f"_{n}"
        candidate = clean[:MAX_TITLE_LENGTH - len(suffix)] + suffix
        n += 1
    if candidate != title:
        log.warning("Worksheet title %r renamed to %r", title, candidate)
    return candidate


def style_worksheet(ws) -> None:
    """Apply fonts, borders, header colours and column widths."""
    for row in ws.iter_rows():
        for cell in row:
            cell.border = _BORDER
            cell.alignment = Alignment(vertical="center")
            cell.font = _KEY_FONT if cell.column == 1 else _FONT
    for r in range(1, ws.max_row + 1):
        ws.row_dimensions[r].height = _ROW_HEIGHT

    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for col_cells in ws.iter_cols():
        longest = max((len(str(c.value)) for c in col_cells if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_cells[0].column)].width = longest + _WIDTH_PADDING


def _clean_row(namespace: str, row: list[str]) -> list[str]:
    """Drop control characters that worksheets cannot store."""
    cleaned = []
    for value in row:
        if isinstance(value, str) and ILLEGAL_CHARACTERS_RE.search(value):
            log.warning("%s: control characters removed from %r in the workbook",
                        namespace, row[0])
            value = ILLEGAL_CHARACTERS_RE.sub("", value)
        cleaned.append(value)
    return cleaned


def write_workbook(tables: Iterable[Table], path: str | Path, styled: bool = True) -> Path:
    """Write each table to its own worksheet and save the workbook."""
    tables = list(tables)
    if not tables:
        raise WorkbookError("No tables to write")

    wb = Workbook()
    wb.remove(wb.active)
    for table in tables:
        ws = wb.create_sheet(title=sanitize_sheet_title(table.namespace, wb.sheetnames))
        for row in table.as_lists():
            ws.append(_clean_row(table.namespace, row))
        if styled:
            style_worksheet(ws)

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    wb.save(out)
    return out


def read_workbook(path: str | Path, language_count: Optional[int] = None) -> list[SheetData]:
    """Read every worksheet of *path* into :class:`SheetData`."""
    path = Path(path)
    # Damaged sheet XML raises ParseError, a SyntaxError under both XML backends
    try:
        wb = load_workbook(path, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, SyntaxError) as e:
        raise WorkbookError(f"Cannot read workbook {path.name}: {e}") from e

    if not wb.worksheets:
        raise WorkbookError(f"No sheet found in {path.name}")

    sheets = []
    for ws in wb.worksheets:
        log.info("Processing sheet %s...", ws.title)
        sheets.append(parse_rows(ws.iter_rows(values_only=True), ws.title, language_count))
    return sheets
