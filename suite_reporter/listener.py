# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Runner-neutral report listener.

Host runner adapters (the pytest plugin and the Robot Framework listener)
translate their native events into the callbacks below. The listener never
raises into its host: anything unexpected is logged and the callback returns.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from suite_reporter.config import ReporterSettings
from suite_reporter.core.models import Report, TestStatus
from suite_reporter.log_buffer import LogCollector, log_collector
from suite_reporter.reporting.aggregator import SuiteAggregator, current_millis
from suite_reporter.reporting.assembler import assemble_report
from suite_reporter.reporting.record_builder import RunnerResult, build_test_record
from suite_reporter.reporting.writer import ArtifactWriter, EmittedArtifacts

logger = logging.getLogger(__name__)


class JsonTestReportListener:
    """Accumulates test outcomes and emits the report artifacts at suite end.

    Callbacks are expected in order: ``on_suite_start``, any number of
    ``on_test_success`` / ``on_test_failure`` / ``on_test_skipped``, then
    ``on_suite_finish``.
    """

    def __init__(
        self,
        settings: ReporterSettings | None = None,
        collector: LogCollector | None = None,
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self.settings = settings or ReporterSettings()
        self.collector = collector if collector is not None else log_collector
        self.writer = ArtifactWriter(self.settings)
        self._clock = clock
        self.aggregator = SuiteAggregator(clock)
        self.report: Report | None = None
        self.artifacts: EmittedArtifacts | None = None

    def on_suite_start(self) -> None:
        self.aggregator = SuiteAggregator(self._clock)
        self.report = None
        self.artifacts = None
        self.aggregator.on_start()

    def on_test_success(self, result: RunnerResult) -> None:
        self._record(result, TestStatus.PASSED)

    def on_test_failure(self, result: RunnerResult) -> None:
        self._record(result, TestStatus.FAILED)

    def on_test_skipped(self, result: RunnerResult) -> None:
        self._record(result, TestStatus.SKIPPED)

    def on_suite_finish(self, now: datetime | None = None) -> EmittedArtifacts:
        """Assemble the report and write both artifacts.

        Args:
            now: Moment used for the execution date and the folder name; naive
                values are local time. Defaults to now.

        Returns:
            The paths written; a failed sink is reported as ``None``.
        """
        try:
            moment = (now or datetime.now()).astimezone()
            suite_result = self.aggregator.finish()
            self.report = assemble_report(suite_result, self.settings, moment)
            self.artifacts = self.writer.emit(self.report, moment)
        except Exception:
            logger.exception("Failed to produce the suite report")
            self.artifacts = EmittedArtifacts()
        return self.artifacts

    # Hooks without reporting behaviour
    def on_test_start(self, result: RunnerResult) -> None:
        pass

    def on_test_failed_but_within_success_percentage(self, result: RunnerResult) -> None:
        pass

    def on_test_failed_with_timeout(self, result: RunnerResult) -> None:
        pass

    def _record(self, result: RunnerResult, status: TestStatus) -> None:
        try:
            record = build_test_record(result, status, self.collector.snapshot())
            self.aggregator.record(record)
        except Exception:
            logger.exception(f"Failed to record result of {result.method_name}")
        finally:
            self.collector.clear()
