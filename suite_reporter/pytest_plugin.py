# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""pytest plugin writing the JSON suite report.

Enable with ``pytest --json-report`` or ``json_report = true`` in the ini
file. Each test item produces exactly one record:

- setup failure -> FAILED, setup skip -> SKIPPED
- call pass -> PASSED, call failure -> FAILED, call skip -> SKIPPED
- xfail -> SKIPPED, xpass -> PASSED

Test code adds lines to a test's logs through the standard ``logging`` module
or the ``report_log`` fixture, and attaches a screenshot with
``record_property("screenshot", path)``.
"""

import inspect
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

from suite_reporter.config import ReporterSettings
from suite_reporter.listener import JsonTestReportListener
from suite_reporter.log_buffer import LogCollector, LogCollectorHandler, log_collector
from suite_reporter.reporting.record_builder import RunnerResult

logger = logging.getLogger(__name__)

PLUGIN_NAME = "suite-reporter-json"

# Logger whose errors are echoed to stderr while the artifacts are written
_OWN_LOGGER_NAME = __name__.split(".")[0]


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("json-report", "JSON suite report")
    group.addoption(
        "--json-report",
        action="store_true",
        default=False,
        help="Write Test_Reports/<timestamp>/test-results.json and payload.json.",
    )
    group.addoption(
        "--json-report-browser",
        default=None,
        help="Browser label stored in the report (env: SUITE_REPORTER_BROWSER).",
    )
    group.addoption(
        "--json-report-platform",
        default=None,
        help="Platform label stored in the report (env: SUITE_REPORTER_PLATFORM).",
    )
    group.addoption(
        "--json-report-dir",
        default=None,
        help="Directory receiving Test_Reports (default: current directory).",
    )
    group.addoption(
        "--json-report-properties",
        default=None,
        help="Path to project.properties (default: ./project.properties).",
    )
    parser.addini(
        "json_report", type="bool", default=False, help="Enable the JSON suite report."
    )
    parser.addini(
        "json_report_log_level",
        default="INFO",
        help="Lowest log level captured into each test's logs.",
    )


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


def settings_from_config(config: pytest.Config) -> ReporterSettings:
    return ReporterSettings(
        browser=config.getoption("json_report_browser"),
        platform=config.getoption("json_report_platform"),
        output_dir=_optional_path(config.getoption("json_report_dir")),
        properties_path=_optional_path(config.getoption("json_report_properties")),
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "description(text): description stored with the test's record"
    )
    if not (config.getoption("json_report") or config.getini("json_report")):
        return
    config.pluginmanager.register(JsonReportPlugin(config), PLUGIN_NAME)


def pytest_unconfigure(config: pytest.Config) -> None:
    plugin = config.pluginmanager.get_plugin(PLUGIN_NAME)
    if plugin is not None:
        config.pluginmanager.unregister(plugin)


@pytest.fixture
def report_log() -> LogCollector:
    """Log buffer whose lines are stored with the current test's record."""
    return log_collector


def describe_item(item: pytest.Item) -> str | None:
    """Description of a test: the ``description`` marker, else its docstring's first line."""
    marker = item.get_closest_marker("description")
    if marker is not None and marker.args:
        return str(marker.args[0])

    obj = getattr(item, "obj", None)
    doc = inspect.getdoc(obj) if obj is not None else None
    if not doc:
        return None
    return doc.splitlines()[0]


def _log_level(value: Any) -> int:
    level = logging.getLevelName(str(value).strip().upper())
    if isinstance(level, int):
        return level
    logger.warning(f"Unknown json_report_log_level {value!r}, using INFO")
    return logging.INFO


def _to_millis(seconds: float) -> int:
    return int(seconds * 1000)


class JsonReportPlugin:
    """Bridges pytest's hooks to a JsonTestReportListener."""

    def __init__(
        self, config: pytest.Config, listener: JsonTestReportListener | None = None
    ) -> None:
        self.config = config
        self.listener = listener or JsonTestReportListener(settings_from_config(config))
        self.handler = LogCollectorHandler(
            self.listener.collector, _log_level(config.getini("json_report_log_level"))
        )
        self._recorded: set[str] = set()
        self._root_level: int | None = None

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        root = logging.getLogger()
        root.addHandler(self.handler)
        if self.handler.level and root.getEffectiveLevel() > self.handler.level:
            self._root_level = root.level
            root.setLevel(self.handler.level)
        self.listener.collector.clear()
        self.listener.on_suite_start()

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item: pytest.Item, call: pytest.CallInfo[Any]):
        outcome = yield
        report = outcome.get_result()

        if report.when == "teardown":
            # Teardown output belongs to no record
            self.listener.collector.clear()
            return
        if item.nodeid in self._recorded:
            return
        if report.when == "setup" and report.passed:
            return

        result = RunnerResult(
            method_name=item.name,
            description=describe_item(item),
            start_millis=_to_millis(call.start),
            end_millis=_to_millis(call.stop),
            throwable=call.excinfo.value if call.excinfo is not None else None,
            attributes=dict(item.user_properties),
        )
        self._recorded.add(item.nodeid)

        if hasattr(report, "wasxfail"):
            if report.skipped:
                self.listener.on_test_skipped(result)
            else:
                self.listener.on_test_success(result)
        elif report.failed:
            self.listener.on_test_failure(result)
        elif report.skipped:
            self.listener.on_test_skipped(result)
        else:
            self.listener.on_test_success(result)

    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        root = logging.getLogger()
        root.removeHandler(self.handler)
        if self._root_level is not None:
            root.setLevel(self._root_level)
            self._root_level = None
        diagnostics = logging.StreamHandler(sys.stderr)
        diagnostics.setLevel(logging.ERROR)
        diagnostics.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        own_logger = logging.getLogger(_OWN_LOGGER_NAME)
        own_logger.addHandler(diagnostics)
        try:
            self.listener.on_suite_finish()
        finally:
            own_logger.removeHandler(diagnostics)

    def pytest_terminal_summary(self, terminalreporter: Any) -> None:
        artifacts = self.listener.artifacts
        if artifacts is None:
            return
        terminalreporter.write_sep("-", "json suite report")
        if artifacts.report_path is not None:
            terminalreporter.write_line(f"report: {artifacts.report_path}")
        else:
            terminalreporter.write_line("report: not written (see log output)")
        if artifacts.payload_path is not None:
            terminalreporter.write_line(f"payload: {artifacts.payload_path}")
        else:
            terminalreporter.write_line("payload: not written (see log output)")
