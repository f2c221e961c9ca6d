"""Concrete reporters that collect failures in memory.

:class:`RecordingReporter` satisfies both :class:`~assertkit.assertions.base.Reporter`
and :class:`~assertkit.assertions.base.HelperReporter`. It keeps every report
and the qualified name of every function that declared itself a helper.
"""

from __future__ import annotations

import sys


class RecordingReporter:
    """Reporter that records failures without raising."""

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self.errors: list[str] = []
        self.helpers: set[str] = set()

    def error(self, message: str) -> None:
        self.errors.append(message)

    def helper(self) -> None:
        """Record the calling function as ``module.qualname``."""
        frame = sys._getframe(1)
        module = frame.f_globals.get("__name__", "")
        self.helpers.add(f"{module}.{frame.f_code.co_qualname}")

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def output(self) -> str:
        return "".join(self.errors)

    def first_lines(self) -> list[str]:
        """Return the ``Error:`` line of each recorded report."""
        lines: list[str] = []
        for report in self.errors:
            for line in report.splitlines():
                stripped = line.strip()
                if stripped.startswith("Error:"):
                    lines.append(stripped.removeprefix("Error:").strip())
                    break
        return lines
