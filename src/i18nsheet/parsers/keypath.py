"""Dotted key paths (``menu.file.open``) used as row keys in tables."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Iterable

SEPARATOR = "."


class KeyPathError(ValueError):
    """A key segment or encoded key path that cannot round-trip."""


def validate_segment(segment: str) -> str:
    """Return *segment* unchanged, or raise if it cannot be encoded."""
    if not isinstance(segment, str):
        raise KeyPathError(f"Key segment must be a string, got {type(segment).__name__}")
    if not segment:
        raise KeyPathError("Empty key segment")
    if SEPARATOR in segment:
        raise KeyPathError(f"Key segment {segment!r} contains {SEPARATOR!r}")
    return segment


def encode(segments: Iterable[str]) -> str:
    """Join path segments into a dotted key."""
    parts = [validate_segment(s) for s in segments]
    if not parts:
        raise KeyPathError("Key path needs at least one segment")
    return SEPARATOR.join(parts)


def decode(path: str) -> tuple[str, ...]:
    """Split a dotted key into its segments (any depth)."""
    if not path:
        raise KeyPathError("Empty key path")
    parts = tuple(path.split(SEPARATOR))
    if any(not p for p in parts):
        raise KeyPathError(f"Key path {path!r} has an empty segment")
    return parts
