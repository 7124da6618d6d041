# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Data models for the suite report and the upload payload.

Every model exposes ``to_dict()`` returning a JSON-ready dictionary in a
stable key order. Absent values (``None``) are left out of the output so the
written documents only carry keys that hold data.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from suite_reporter.core.constants import ENVIRONMENT_NAME, PROJECT_NAME


class TestStatus(str, Enum):
    """Outcome of a single finished test."""

    __test__ = False

    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class ErrorData:
    """Failure details attached to a FAILED test record.

    Attributes:
        type: Short class name of the failure cause (e.g. ``AssertionError``).
        message: Failure message, if the cause carried one.
        stack_trace: Frames separated by ``\\n``, without surrounding whitespace.
    """

    type: str
    message: str | None = None
    stack_trace: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "type": self.type,
                "message": self.message,
                "stackTrace": self.stack_trace,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ErrorData":
        return cls(
            type=data["type"],
            message=data.get("message"),
            stack_trace=data.get("stackTrace", ""),
        )


@dataclass
class TestRecord:
    """Normalized outcome of one finished test."""

    __test__ = False

    test_name: str
    status: TestStatus
    logs: list[str] = field(default_factory=list)
    description: str | None = None
    execution_time_ms: int = 0
    screenshot: str | None = None
    error: ErrorData | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_none(
            {
                "logs": list(self.logs),
                "status": self.status.value,
                "testName": self.test_name,
                "description": self.description,
                "executionTimeMs": self.execution_time_ms,
                "screenshot": self.screenshot,
                "error": self.error.to_dict() if self.error else None,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TestRecord":
        error = data.get("error")
        return cls(
            test_name=data["testName"],
            status=TestStatus(data["status"]),
            logs=list(data.get("logs") or []),
            description=data.get("description"),
            execution_time_ms=int(data.get("executionTimeMs", 0)),
            screenshot=data.get("screenshot"),
            error=ErrorData.from_dict(error) if error else None,
        )


@dataclass
class Summary:
    """Suite-level counters.

    ``total_tests`` always equals ``passed + failed + skipped``.
    """

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    total_execution_time_ms: int = 0

    @property
    def total_tests(self) -> int:
        """Total number of recorded tests (computed from counts)."""
        return self.passed + self.failed + self.skipped

    def to_dict(self) -> dict[str, Any]:
        return {
            "failed": self.failed,
            "passed": self.passed,
            "skipped": self.skipped,
            "totalTests": self.total_tests,
            "totalExecutionTimeMs": self.total_execution_time_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Summary":
        return cls(
            passed=int(data.get("passed", 0)),
            failed=int(data.get("failed", 0)),
            skipped=int(data.get("skipped", 0)),
            total_execution_time_ms=int(data.get("totalExecutionTimeMs", 0)),
        )

    def __str__(self) -> str:
        """Concise string representation: total/passed/failed/skipped."""
        return f"{self.total_tests}/{self.passed}/{self.failed}/{self.skipped}"


@dataclass
class Report:
    """Aggregated suite document written to ``test-results.json``."""

    tests: list[TestRecord]
    summary: Summary
    browser: str
    platform: str
    execution_date: str
    project: str = PROJECT_NAME
    environment: str = ENVIRONMENT_NAME

    def to_dict(self) -> dict[str, Any]:
        return {
            "tests": [test.to_dict() for test in self.tests],
            "browser": self.browser,
            "project": self.project,
            "summary": self.summary.to_dict(),
            "platform": self.platform,
            "environment": self.environment,
            "executionDate": self.execution_date,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Report":
        return cls(
            tests=[TestRecord.from_dict(test) for test in data.get("tests", [])],
            summary=Summary.from_dict(data.get("summary", {})),
            browser=data["browser"],
            platform=data["platform"],
            execution_date=data["executionDate"],
            project=data.get("project", PROJECT_NAME),
            environment=data.get("environment", ENVIRONMENT_NAME),
        )


@dataclass
class Payload:
    """Upload envelope embedding the report together with identity metadata."""

    id: str
    run_id: str
    report: Report
    user_id: str
    project_id: str

    @property
    def timestamp(self) -> str:
        return self.report.execution_date

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "run_id": self.run_id,
            "json_result": self.report.to_dict(),
            "timestamp": self.timestamp,
            "user_id": self.user_id,
            "project_id": self.project_id,
            "created_at": self.timestamp,
        }
