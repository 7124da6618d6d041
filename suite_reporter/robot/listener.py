# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Robot Framework listener writing the JSON suite report.

Usage::

    robot --listener suite_reporter.robot.listener.JsonReportListener tests/
    robot --listener suite_reporter.robot.listener.JsonReportListener:browser=Firefox tests/

Messages logged by keywords while a test runs become that test's logs. Robot
Framework has no exception objects for failures, so a failed test carries an
``ExecutionFailed`` error with the test message and no frames.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from suite_reporter.config import ReporterSettings
from suite_reporter.listener import JsonTestReportListener
from suite_reporter.reporting.record_builder import Failure, RunnerResult

logger = logging.getLogger(__name__)

# Robot Framework's own exception class for failed keywords
FAILURE_TYPE = "ExecutionFailed"


def _parse_timestamp(timestamp_str: str | None) -> datetime | None:
    """Parse Robot Framework's legacy ``20250131 12:34:56.789`` timestamps."""
    if not timestamp_str or timestamp_str == "N/A":
        return None
    for fmt in ("%Y%m%d %H:%M:%S.%f", "%Y%m%d %H:%M:%S"):
        try:
            return datetime.strptime(timestamp_str, fmt)
        except ValueError:
            continue
    logger.warning(f"Failed to parse timestamp: {timestamp_str}")
    return None


def _epoch_millis(result: Any, name: str) -> int:
    """Read ``start``/``end`` time of a result object as epoch milliseconds.

    Robot Framework 7 exposes ``start_time``/``end_time`` datetimes, older
    releases only ``starttime``/``endtime`` strings.
    """
    moment = getattr(result, f"{name}_time", None)
    if not isinstance(moment, datetime):
        moment = _parse_timestamp(getattr(result, f"{name}time", None))
    if moment is None:
        return 0
    return int(moment.timestamp() * 1000)


class JsonReportListener:
    """Listener (API version 3) bridging Robot Framework to the report listener.

    Args:
        browser: Browser label stored in the report.
        platform: Platform label stored in the report.
        output_dir: Directory receiving Test_Reports.
        properties: Path to project.properties.
    """

    ROBOT_LISTENER_API_VERSION = 3

    def __init__(
        self,
        browser: str | None = None,
        platform: str | None = None,
        output_dir: str | None = None,
        properties: str | None = None,
    ) -> None:
        settings = ReporterSettings(
            browser=browser,
            platform=platform,
            output_dir=Path(output_dir) if output_dir else None,
            properties_path=Path(properties) if properties else None,
        )
        self.listener = JsonTestReportListener(settings)
        self._suite_depth = 0
        self._in_test = False

    def start_suite(self, data: Any, result: Any) -> None:
        self._suite_depth += 1
        if self._suite_depth == 1:
            self.listener.collector.clear()
            self.listener.on_suite_start()

    def end_suite(self, data: Any, result: Any) -> None:
        self._suite_depth -= 1
        if self._suite_depth == 0:
            self.listener.on_suite_finish()

    def start_test(self, data: Any, result: Any) -> None:
        self._in_test = True

    def end_test(self, data: Any, result: Any) -> None:
        self._in_test = False
        runner_result = RunnerResult(
            method_name=result.name,
            description=getattr(data, "doc", None),
            start_millis=_epoch_millis(result, "start"),
            end_millis=_epoch_millis(result, "end"),
        )

        status = result.status
        if status == "PASS":
            self.listener.on_test_success(runner_result)
        elif status == "FAIL":
            runner_result.throwable = Failure(
                type=FAILURE_TYPE, message=result.message or None
            )
            self.listener.on_test_failure(runner_result)
        else:
            # SKIP and NOT RUN
            self.listener.on_test_skipped(runner_result)

    def log_message(self, message: Any) -> None:
        if self._in_test:
            self.listener.collector.append(f"{message.level} {message.message}")
