# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Report assembler composing the suite document at suite end."""

import logging
from datetime import datetime, timezone

from suite_reporter.config import ReporterSettings
from suite_reporter.core.constants import EXECUTION_DATE_FORMAT
from suite_reporter.core.models import Report, Summary, TestRecord, TestStatus
from suite_reporter.reporting.aggregator import SuiteResult

logger = logging.getLogger(__name__)


def format_execution_date(moment: datetime | None = None) -> str:
    """Format a moment as ``yyyy-MM-dd HH:mm:ss+00:00`` in UTC.

    Args:
        moment: Timezone-aware datetime; naive values are treated as UTC.
            Defaults to now.

    Returns:
        The formatted timestamp, e.g. ``2025-01-04 17:30:05+00:00``.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime(EXECUTION_DATE_FORMAT)}+00:00"


def summarize(tests: list[TestRecord], duration_millis: int) -> Summary:
    """Count outcomes in a single pass over the records."""
    summary = Summary(total_execution_time_ms=max(0, duration_millis))
    for test in tests:
        if test.status == TestStatus.PASSED:
            summary.passed += 1
        elif test.status == TestStatus.FAILED:
            summary.failed += 1
        elif test.status == TestStatus.SKIPPED:
            summary.skipped += 1
    return summary


def assemble_report(
    suite_result: SuiteResult,
    settings: ReporterSettings | None = None,
    now: datetime | None = None,
) -> Report:
    """Compose the Report for a finished suite.

    Args:
        suite_result: Records and timestamps returned by SuiteAggregator.finish().
        settings: Runtime options used for the browser and platform labels.
        now: Moment used for ``executionDate``; defaults to the current time.

    Returns:
        The assembled Report, tests in arrival order.
    """
    settings = settings or ReporterSettings()
    summary = summarize(suite_result.tests, suite_result.duration_millis)

    report = Report(
        tests=list(suite_result.tests),
        summary=summary,
        browser=settings.resolve_browser(),
        platform=settings.resolve_platform(),
        execution_date=format_execution_date(now),
    )
    logger.info(
        f"Assembled report: {summary.total_tests} tests "
        f"({summary.passed} passed, {summary.failed} failed, "
        f"{summary.skipped} skipped)"
    )
    return report
