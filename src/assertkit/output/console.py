"""Rich Console factory and theme for assertkit terminal output.

Creates Console instances that render to a StringIO buffer, so callers get
a plain string back and decide where to write it. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from collections.abc import Mapping
from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

ASSERTKIT_THEME = Theme(
    {
        "assertkit.title": "bold red",
        "assertkit.test": "bold cyan",
        "assertkit.count": "magenta",
        "assertkit.error": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ASSERTKIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def render_failure_summary(
    failures: Mapping[str, list[str]],
    *,
    no_color: bool = False,
    width: int | None = None,
) -> str:
    """Render a table of tests that recorded soft assertion failures.

    *failures* maps a test id to the first-line error of each failure.
    Returns an empty string when there is nothing to report.
    """
    if not failures:
        return ""
    console = create_console(no_color=no_color, width=width)
    table = Table(title="assertkit soft failures", title_style="assertkit.title")
    table.add_column("Test", style="assertkit.test")
    table.add_column("Count", style="assertkit.count", justify="right")
    table.add_column("First error", style="assertkit.error")
    for test_id, errors in failures.items():
        table.add_row(test_id, str(len(errors)), errors[0] if errors else "")
    console.print(table)
    return get_output(console)
