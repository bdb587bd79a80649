"""Conversion pipelines, prompts and settings."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Failure:
    """A file, sheet or language that could not be converted."""
    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"
