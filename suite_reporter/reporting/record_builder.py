# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Conversion of a finished-test event into a normalized TestRecord."""

import logging
import traceback
from dataclasses import dataclass, field
from typing import Any

from suite_reporter.core.constants import SCREENSHOT_ATTRIBUTE
from suite_reporter.core.models import ErrorData, TestRecord, TestStatus

logger = logging.getLogger(__name__)


@dataclass
class Failure:
    """Failure cause for runners that do not hand over a Python exception.

    Attributes:
        type: Short name of the failure category.
        message: Failure message, if any.
        frames: Stack frames, outermost first.
    """

    type: str
    message: str | None = None
    frames: list[str] = field(default_factory=list)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        """Build a Failure from a raised exception and its traceback."""
        frames = [
            f"{frame.filename}:{frame.lineno} in {frame.name}"
            for frame in traceback.extract_tb(exc.__traceback__)
        ]
        message = str(exc)
        return cls(type=type(exc).__name__, message=message or None, frames=frames)

    def to_error_data(self) -> ErrorData:
        stack_trace = "\n".join(frame.strip() for frame in self.frames).strip()
        return ErrorData(type=self.type, message=self.message, stack_trace=stack_trace)


@dataclass
class RunnerResult:
    """Runner-neutral view of a finished test handed over by an adapter.

    Attributes:
        method_name: Method-level identifier of the test.
        description: Free-form description, if the runner has one.
        start_millis: Wall-clock start time in epoch milliseconds.
        end_millis: Wall-clock end time in epoch milliseconds.
        throwable: Failure cause, either an exception or a pre-built Failure.
        attributes: Custom attributes attached to the result by test code.
    """

    method_name: str
    description: str | None = None
    start_millis: int = 0
    end_millis: int = 0
    throwable: BaseException | Failure | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)


def _normalize_description(description: Any) -> str | None:
    if description is None:
        return None
    text = str(description).strip()
    return text or None


def build_error_data(throwable: BaseException | Failure) -> ErrorData:
    """Convert a failure cause into the ErrorData stored on a FAILED record."""
    if isinstance(throwable, Failure):
        return throwable.to_error_data()
    return Failure.from_exception(throwable).to_error_data()


def build_test_record(
    result: RunnerResult, status: TestStatus, logs: list[str] | None = None
) -> TestRecord:
    """Build the TestRecord for one finished test.

    Missing optional inputs are normalized to absent values; this function
    never raises because of them.

    Args:
        result: The runner's result for the finished test.
        status: Outcome reported by the runner callback.
        logs: Snapshot of the log buffer taken when the test finished.

    Returns:
        The normalized TestRecord.
    """
    execution_time_ms = int(result.end_millis) - int(result.start_millis)
    if execution_time_ms < 0:
        logger.debug(
            f"Negative execution time for {result.method_name} "
            f"({execution_time_ms} ms), clamping to 0"
        )
        execution_time_ms = 0

    screenshot = result.get_attribute(SCREENSHOT_ATTRIBUTE)

    error = None
    if status == TestStatus.FAILED and result.throwable is not None:
        error = build_error_data(result.throwable)

    return TestRecord(
        test_name=result.method_name,
        status=status,
        logs=list(logs) if logs else [],
        description=_normalize_description(result.description),
        execution_time_ms=execution_time_ms,
        screenshot=str(screenshot) if screenshot is not None else None,
        error=error,
    )
