"""Translation trees and their flat (key path, value) form."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Union

from i18nsheet.parsers.keypath import decode, encode, validate_segment


class TreeConflictError(ValueError):
    """A leaf and a nested object were both requested at the same key."""

    def __init__(self, path: tuple[str, ...], message: str):
        self.path = path
        super().__init__(f"{encode(path)}: {message}")


@dataclass(frozen=True)
class Leaf:
    """A translated string."""
    value: str


@dataclass
class Node:
    """A nested group of keys."""
    children: dict[str, "TreeNode"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.children)


TreeNode = Union[Leaf, Node]


@dataclass(frozen=True)
class FlatEntry:
    """One leaf of a tree addressed by its full key path."""
    path: tuple[str, ...]
    value: str

    @property
    def key(self) -> str:
        return encode(self.path)


def scalar_text(value: Any) -> str:
    """Render a JSON or spreadsheet scalar as translation text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _node_from_json(value: Any) -> TreeNode:
    if isinstance(value, dict):
        return Node({str(k): _node_from_json(v) for k, v in value.items()})
    if isinstance(value, list):
        # Arrays are exported like objects keyed by index
        return Node({str(i): _node_from_json(v) for i, v in enumerate(value)})
    return Leaf(scalar_text(value))


def tree_from_json(obj: Any) -> Node:
    """Build a tree from a parsed JSON document."""
    if not isinstance(obj, dict):
        raise ValueError("Expected JSON object at root level")
    return _node_from_json(obj)


def tree_to_json(node: Node) -> dict:
    """Convert a tree back to plain dicts and strings."""
    result: dict = {}
    for key, child in node.children.items():
        if isinstance(child, Node):
            result[key] = tree_to_json(child)
        else:
            result[key] = child.value
    return result


def flatten(node: Node, prefix: tuple[str, ...] = ()) -> Iterator[FlatEntry]:
    """Yield every leaf of *node* depth-first, in key insertion order.

    Values are stripped of surrounding whitespace. Keys that cannot be
    written as a dotted path raise :class:`KeyPathError`.
    """
    for key, child in node.children.items():
        path = prefix + (validate_segment(key),)
        if isinstance(child, Node):
            yield from flatten(child, path)
        else:
            yield FlatEntry(path, child.value.strip())


def unflatten(entries: Mapping[Union[str, tuple[str, ...]], str]) -> Node:
    """Rebuild a tree from ``{key path: value}``.

    Keys may be dotted strings or segment tuples. Paths of any depth are
    supported; a path that needs to pass through an existing leaf, or a leaf
    that would replace an existing object, raises :class:`TreeConflictError`.
    """
    root = Node()
    for key, value in entries.items():
        path = decode(key) if isinstance(key, str) else tuple(key)
        current = root
        for depth, segment in enumerate(path[:-1]):
            child = current.children.get(segment)
            if child is None:
                child = Node()
                current.children[segment] = child
            elif isinstance(child, Leaf):
                raise TreeConflictError(
                    path[:depth + 1],
                    f"is a value, cannot hold nested key {encode(path)!r}",
                )
            current = child
        last = path[-1]
        if isinstance(current.children.get(last), Node):
            raise TreeConflictError(path, "already holds nested keys, cannot be a value")
        current.children[last] = Leaf(value)
    return root


def sort_tree(node: Node) -> Node:
    """Return a copy of *node* with keys ordered case-insensitively at every level."""
    ordered = Node()
    for key in sorted(node.children, key=lambda k: (k.lower(), k)):
        child = node.children[key]
        ordered.children[key] = sort_tree(child) if isinstance(child, Node) else child
    return ordered
