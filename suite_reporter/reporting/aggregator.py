# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Suite aggregator holding the records of one suite run."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from suite_reporter.core.models import TestRecord

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class SuiteResult:
    """Records and bracketing timestamps of a finished suite."""

    tests: list[TestRecord]
    start_millis: int
    end_millis: int

    @property
    def duration_millis(self) -> int:
        return max(0, self.end_millis - self.start_millis)


class SuiteAggregator:
    """Collects TestRecords in arrival order between suite start and finish.

    ``record()`` is guarded by a lock so runners finishing tests on several
    threads cannot interleave appends.
    """

    def __init__(self, clock: Callable[[], int] = current_millis) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self.tests: list[TestRecord] = []
        self.start_millis: int | None = None
        self.end_millis: int | None = None

    def on_start(self) -> None:
        self.start_millis = self._clock()
        logger.debug(f"Suite started at {self.start_millis}")

    def record(self, test_record: TestRecord) -> None:
        with self._lock:
            self.tests.append(test_record)
        logger.debug(f"Recorded {test_record.test_name}: {test_record.status.value}")

    def finish(self) -> SuiteResult:
        self.end_millis = self._clock()
        if self.start_millis is None:
            logger.warning("Suite finished without a start event, using end time")
            self.start_millis = self.end_millis

        with self._lock:
            tests = list(self.tests)

        logger.debug(
            f"Suite finished with {len(tests)} tests in "
            f"{self.end_millis - self.start_millis} ms"
        )
        return SuiteResult(
            tests=tests, start_millis=self.start_millis, end_millis=self.end_millis
        )
