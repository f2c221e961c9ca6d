"""pytest plugin — soft-failure reporter fixture and end-of-test gate.

Assertions record failures on the ``reporter`` fixture and let the test keep
running. Once the test body returns, any recorded failures fail the test in
one go. A summary of affected tests is printed at the end of the session.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

from assertkit.config.logging import configure_logging
from assertkit.config.settings import AssertSettings, reset_settings, use_settings
from assertkit.output.console import render_failure_summary
from assertkit.reporters import RecordingReporter

_reporter_key = pytest.StashKey[RecordingReporter]()
_summary_key = pytest.StashKey[dict[str, list[str]]]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("assertkit", "soft assertions")
    group.addoption(
        "--assertkit-config",
        default=None,
        help="Path to assertkit.toml (default: walk up from the rootdir).",
    )
    group.addoption(
        "--assertkit-verbose",
        action="store_true",
        default=False,
        help="Emit DEBUG-level assertkit logs.",
    )
    group.addoption(
        "--assertkit-log-json",
        action="store_true",
        default=False,
        help="Render assertkit logs as JSON lines.",
    )


def pytest_configure(config: pytest.Config) -> None:
    overrides: dict[str, Any] = {}
    if config.getoption("assertkit_verbose"):
        overrides["verbose"] = True
    if config.getoption("assertkit_log_json"):
        overrides["log_json"] = True

    settings = AssertSettings.load(
        config_path=config.getoption("assertkit_config"),
        start=config.rootpath,
        **overrides,
    )
    use_settings(settings)
    config.stash[_summary_key] = {}
    if settings.verbose or settings.log_json:
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)


@pytest.fixture
def reporter(request: pytest.FixtureRequest) -> RecordingReporter:
    """Reporter that collects soft assertion failures for the current test."""
    rep = RecordingReporter(name=request.node.nodeid)
    request.node.stash[_reporter_key] = rep
    return rep


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item) -> Generator[None, object, object]:
    result = yield
    rep = item.stash.get(_reporter_key, None)
    if rep is not None and rep.failed:
        summary = item.config.stash.get(_summary_key, None)
        if summary is not None:
            summary[item.nodeid] = rep.first_lines()
        pytest.fail(rep.output(), pytrace=False)
    return result


def pytest_terminal_summary(terminalreporter: Any, exitstatus: int, config: pytest.Config) -> None:
    failures = config.stash.get(_summary_key, {})
    text = render_failure_summary(failures, no_color=not terminalreporter.hasmarkup)
    if text:
        terminalreporter.write_sep("=", "assertkit")
        terminalreporter.write(text)


def pytest_unconfigure(config: pytest.Config) -> None:
    reset_settings()
