"""Reporter contract and the shared ``fail`` primitive.

Every assertion funnels its failure through :func:`fail`, which assembles a
labeled report (trace, error, test name, custom message), hands it to the
reporter, and returns False.
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from assertkit.config.settings import get_settings
from assertkit.output.formatters import labeled_output, message_from_msg_and_args

logger = logging.getLogger(__name__)

_PACKAGE = __name__.partition(".")[0]


@runtime_checkable
class Reporter(Protocol):
    """Anything that can record a formatted failure message."""

    def error(self, message: str) -> None: ...


@runtime_checkable
class HelperReporter(Reporter, Protocol):
    """Reporter that can also mark the calling frame as a helper."""

    def helper(self) -> None: ...


class Failure(BaseModel):
    """Structured payload of one failed assertion."""

    model_config = {"frozen": True}

    error: str
    messages: str = ""
    trace: list[str] = Field(default_factory=list)
    test: str | None = None

    def render(self) -> str:
        content: list[tuple[str, str]] = []
        if self.trace:
            content.append(("Error Trace", "\n".join(self.trace)))
        content.append(("Error", self.error))
        if self.test:
            content.append(("Test", self.test))
        if self.messages:
            content.append(("Messages", self.messages))
        return "\n" + labeled_output(content)


def caller_info(max_depth: int = 10) -> list[str]:
    """Return ``dir/file.py:line`` entries for the frames that called in.

    Frames inside this package and frames flagged with ``__tracebackhide__``
    are skipped. The walk stops at the first test function.
    """
    entries: list[str] = []
    for frame, lineno in traceback.walk_stack(sys._getframe(1)):
        if frame.f_locals.get("__tracebackhide__"):
            continue
        module = frame.f_globals.get("__name__", "")
        if module == _PACKAGE or module.startswith(_PACKAGE + "."):
            continue
        path = Path(frame.f_code.co_filename)
        entries.append(f"{path.parent.name}/{path.name}:{lineno}")
        if frame.f_code.co_name.startswith("test") or len(entries) >= max_depth:
            break
    return entries


def _entry_point() -> str:
    """Name of the outermost assertkit function on the current stack."""
    name = ""
    for frame, _ in traceback.walk_stack(sys._getframe(1)):
        module = frame.f_globals.get("__name__", "")
        if module == _PACKAGE or module.startswith(_PACKAGE + "."):
            name = frame.f_code.co_name
    return name


def fail(reporter: Reporter, failure_message: str, *msg_and_args: Any) -> bool:
    """Report a failure through *reporter* and return False."""
    __tracebackhide__ = True
    if isinstance(reporter, HelperReporter):
        reporter.helper()

    report = get_settings().report
    name = getattr(reporter, "name", None)
    failure = Failure(
        error=failure_message,
        messages=message_from_msg_and_args(msg_and_args),
        trace=caller_info(report.max_trace_depth) if report.error_trace else [],
        test=name if isinstance(name, str) and name else None,
    )
    logger.debug(
        "Assertion failed: %s",
        failure.error,
        extra={"assertion": _entry_point(), "error": failure.error},
    )
    reporter.error(failure.render())
    return False
