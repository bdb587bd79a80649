"""Interactive console questions (language labels, language counts)."""
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Callable, Iterable, Optional

InputFunc = Callable[[str], str]


def ask_string(message: str, input_func: Optional[InputFunc] = None) -> str:
    """Ask for free text; end of input counts as an empty answer."""
    ask = input_func or input
    try:
        return ask(f"{message} ")
    except EOFError:
        return ""


def ask_number(message: str, input_func: Optional[InputFunc] = None) -> Optional[int]:
    """Ask for a non-negative integer until one is given.

    An empty answer returns ``None``.
    """
    while True:
        answer = ask_string(message, input_func).strip()
        if not answer:
            return None
        if answer.isdecimal():
            return int(answer)
        print(f"{answer!r} is not a number.")


def ask_language_labels(codes: Iterable[str], input_func: Optional[InputFunc] = None) -> dict[str, str]:
    """Ask which header label to use for each language folder (default: the code)."""
    labels = {}
    for code in codes:
        name = ask_string(f"Which label do you want to use for the language {code}?", input_func).strip()
        labels[code] = name or code
    return labels


def ask_language_count(workbook: str, input_func: Optional[InputFunc] = None) -> Optional[int]:
    """Ask how many language columns *workbook* has (empty: read from header)."""
    return ask_number(
        f"How many languages do you have in {workbook}? (empty = detect from header)",
        input_func,
    )
