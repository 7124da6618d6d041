# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Tests for the runner-neutral JsonTestReportListener."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from suite_reporter.config import ReporterSettings
from suite_reporter.listener import JsonTestReportListener
from suite_reporter.log_buffer import LogCollector
from suite_reporter.reporting.record_builder import Failure, RunnerResult

NOW = datetime(2025, 1, 4, 17, 30, 5, tzinfo=timezone.utc)


@pytest.fixture
def collector() -> LogCollector:
    return LogCollector()


@pytest.fixture
def listener(fake_clock, collector: LogCollector) -> JsonTestReportListener:
    return JsonTestReportListener(
        ReporterSettings(browser="Chrome 128.0", platform="Windows 11"),
        collector=collector,
        clock=fake_clock,
    )


def _report_json(listener: JsonTestReportListener) -> dict:
    assert listener.artifacts is not None and listener.artifacts.report_path is not None
    return json.loads(listener.artifacts.report_path.read_text(encoding="utf-8"))


def test_single_passing_test(
    workdir: Path,
    properties_file: Path,
    listener: JsonTestReportListener,
    collector: LogCollector,
) -> None:
    listener.on_suite_start()
    collector.append("opened browser")
    collector.append("clicked submit")
    listener.on_test_success(
        RunnerResult(
            method_name="login",
            description="verify login",
            start_millis=1000,
            end_millis=1500,
        )
    )
    listener.on_suite_finish(NOW)

    report = _report_json(listener)
    assert report["tests"] == [
        {
            "logs": ["opened browser", "clicked submit"],
            "status": "PASSED",
            "testName": "login",
            "description": "verify login",
            "executionTimeMs": 500,
        }
    ]
    assert report["summary"]["passed"] == 1
    assert report["summary"]["failed"] == 0
    assert report["summary"]["skipped"] == 0
    assert report["summary"]["totalTests"] == 1
    assert report["executionDate"] == "2025-01-04 17:30:05+00:00"


def test_log_buffer_cleared_between_tests(
    workdir: Path, listener: JsonTestReportListener, collector: LogCollector
) -> None:
    listener.on_suite_start()
    collector.append("first test line")
    listener.on_test_success(RunnerResult(method_name="one"))
    collector.append("second test line")
    listener.on_test_failure(RunnerResult(method_name="two"))
    listener.on_suite_finish(NOW)

    tests = _report_json(listener)["tests"]
    assert tests[0]["logs"] == ["first test line"]
    assert tests[1]["logs"] == ["second test line"]
    assert len(collector) == 0


def test_mixed_outcomes(
    workdir: Path,
    properties_file: Path,
    listener: JsonTestReportListener,
    fake_clock,
) -> None:
    listener.on_suite_start()
    listener.on_test_success(RunnerResult(method_name="login", start_millis=0, end_millis=10))
    listener.on_test_failure(
        RunnerResult(
            method_name="checkout",
            start_millis=0,
            end_millis=250,
            throwable=Failure(
                type="AssertionError",
                message="expected 200 got 500",
                frames=["a.b.C.m(C.java:42)", "x.y.Z.n(Z.java:7)"],
            ),
        )
    )
    listener.on_test_skipped(RunnerResult(method_name="flaky"))
    fake_clock.advance(2500)
    listener.on_suite_finish(NOW)

    report = _report_json(listener)
    assert [t["status"] for t in report["tests"]] == ["PASSED", "FAILED", "SKIPPED"]
    assert report["tests"][1]["error"] == {
        "type": "AssertionError",
        "message": "expected 200 got 500",
        "stackTrace": "a.b.C.m(C.java:42)\nx.y.Z.n(Z.java:7)",
    }
    assert "error" not in report["tests"][2]
    assert report["summary"] == {
        "failed": 1,
        "passed": 1,
        "skipped": 1,
        "totalTests": 3,
        "totalExecutionTimeMs": 2500,
    }

    payload = json.loads((workdir / "payload.json").read_text(encoding="utf-8"))
    assert payload["json_result"] == report


def test_no_op_hooks_record_nothing(
    workdir: Path, listener: JsonTestReportListener
) -> None:
    listener.on_suite_start()
    result = RunnerResult(method_name="slow", throwable=TimeoutError("took too long"))
    listener.on_test_start(result)
    listener.on_test_failed_but_within_success_percentage(result)
    listener.on_test_failed_with_timeout(result)
    listener.on_suite_finish(NOW)

    assert _report_json(listener)["tests"] == []


def test_missing_properties_never_raises(
    workdir: Path,
    listener: JsonTestReportListener,
    caplog: pytest.LogCaptureFixture,
) -> None:
    listener.on_suite_start()
    listener.on_test_success(RunnerResult(method_name="login"))

    with caplog.at_level(logging.ERROR):
        artifacts = listener.on_suite_finish(NOW)

    assert artifacts.report_path is not None
    assert artifacts.payload_path is None
    assert "Failed to write upload payload" in caplog.text


def test_record_failure_is_logged_and_buffer_cleared(
    workdir: Path,
    listener: JsonTestReportListener,
    collector: LogCollector,
    caplog: pytest.LogCaptureFixture,
) -> None:
    listener.on_suite_start()
    collector.append("orphan line")

    with (
        patch(
            "suite_reporter.listener.build_test_record",
            side_effect=RuntimeError("broken result"),
        ),
        caplog.at_level(logging.ERROR),
    ):
        listener.on_test_success(RunnerResult(method_name="login"))

    assert "Failed to record result of login" in caplog.text
    assert len(collector) == 0


def test_suite_finish_failure_is_logged(
    workdir: Path,
    listener: JsonTestReportListener,
    caplog: pytest.LogCaptureFixture,
) -> None:
    listener.on_suite_start()

    with (
        patch(
            "suite_reporter.listener.assemble_report",
            side_effect=RuntimeError("assembly failed"),
        ),
        caplog.at_level(logging.ERROR),
    ):
        artifacts = listener.on_suite_finish(NOW)

    assert artifacts.report_path is None
    assert artifacts.payload_path is None
    assert "Failed to produce the suite report" in caplog.text


def test_suite_restart_discards_previous_records(
    workdir: Path, listener: JsonTestReportListener
) -> None:
    listener.on_suite_start()
    listener.on_test_success(RunnerResult(method_name="old"))
    listener.on_suite_start()
    listener.on_test_success(RunnerResult(method_name="new"))
    listener.on_suite_finish(NOW)

    assert [t["testName"] for t in _report_json(listener)["tests"]] == ["new"]


def test_suite_duration_brackets_test_times(
    workdir: Path, listener: JsonTestReportListener, fake_clock
) -> None:
    listener.on_suite_start()
    start = fake_clock.now
    fake_clock.advance(300)
    listener.on_test_success(
        RunnerResult(method_name="a", start_millis=start + 10, end_millis=start + 300)
    )
    fake_clock.advance(200)
    listener.on_test_success(
        RunnerResult(method_name="b", start_millis=start + 300, end_millis=start + 500)
    )
    listener.on_suite_finish(NOW)

    summary = _report_json(listener)["summary"]
    assert summary["totalExecutionTimeMs"] >= (start + 500) - (start + 10)


def test_naive_finish_time_is_local_for_both_artifacts(
    workdir: Path,
    properties_file: Path,
    listener: JsonTestReportListener,
) -> None:
    local_now = datetime(2025, 1, 4, 18, 30, 5)
    listener.on_suite_start()
    listener.on_suite_finish(local_now)

    expected_utc = local_now.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    assert listener.artifacts is not None and listener.artifacts.report_path is not None
    assert listener.artifacts.report_path.parent.name == "2025-01-04_18-30-05"
    assert _report_json(listener)["executionDate"] == f"{expected_utc}+00:00"
