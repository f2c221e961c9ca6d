"""Plain-text helpers for assertion failure reports.

A failure report is a block of ``label: content`` lines with the labels
padded to a common width, so multi-line content stays aligned under its
label.
"""

from __future__ import annotations

import ctypes
from collections.abc import Sequence
from typing import Any


def render_operand(value: Any) -> str:
    """Default textual rendering of an operand inside a failure message."""
    if isinstance(value, ctypes._SimpleCData):
        return str(value.value)
    return str(value)


def message_from_msg_and_args(msg_and_args: Sequence[Any]) -> str:
    """Build the custom message from trailing assertion arguments.

    A lone argument is used as-is (strings verbatim, anything else through
    ``str``). Two or more arguments are treated printf-style: the first is
    the format string, the rest are its arguments.
    """
    if not msg_and_args:
        return ""
    first, *rest = msg_and_args
    if not rest:
        return first if isinstance(first, str) else str(first)
    if isinstance(first, str):
        try:
            return first % tuple(rest)
        except (TypeError, ValueError):
            pass  # mismatched format; show the raw arguments instead
    return " ".join(str(arg) for arg in msg_and_args)


def indent_message_lines(message: str, longest_label: int) -> str:
    """Indent continuation lines so they align under the first line."""
    lines = message.splitlines()
    return ("\n\t" + " " * (longest_label + 1) + "\t").join(lines)


def labeled_output(content: Sequence[tuple[str, str]]) -> str:
    """Render ``(label, text)`` pairs as an aligned, tab-separated block."""
    longest = max((len(label) for label, _ in content), default=0)
    parts: list[str] = []
    for label, text in content:
        padding = " " * (longest - len(label))
        parts.append(f"\t{label}:{padding}\t{indent_message_lines(text, longest)}\n")
    return "".join(parts)
