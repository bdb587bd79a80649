"""JSON i18n file reader/writer (one namespace of one language per file)."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from i18nsheet.parsers.tree import FlatEntry, Node, flatten, sort_tree, tree_from_json, tree_to_json


@dataclass
class JSONFileData:
    """Parsed JSON i18n file."""
    path: Path
    tree: Node = field(default_factory=Node)

    @property
    def namespace(self) -> str:
        return self.path.stem

    @property
    def entries(self) -> list[FlatEntry]:
        return list(flatten(self.tree))

    @property
    def total_count(self) -> int:
        return len(self.entries)


def parse_json(path: str | Path) -> JSONFileData:
    """Parse a JSON i18n file into a translation tree."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    # utf-8-sig also reads plain UTF-8 and drops a BOM if present
    try:
        content = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ValueError(f"Could not decode file: {path}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return JSONFileData(path=path, tree=tree_from_json(data))


def dump_tree(tree: Node, indent: int = 2) -> str:
    """Serialize *tree* with keys sorted case-insensitively at every level."""
    obj = tree_to_json(sort_tree(tree))
    return json.dumps(obj, ensure_ascii=False, indent=indent) + "\n"


def save_json(data: JSONFileData, path: Optional[str | Path] = None, indent: int = 2) -> Path:
    """Save a JSON i18n file and return the path written."""
    out = Path(path) if path else data.path
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        f.write(dump_tree(data.tree, indent))
    return out
