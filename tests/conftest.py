# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Global pytest fixtures shared across all test modules.

This module provides common fixtures used by unit and integration tests:
- Environment cleanup (SUITE_REPORTER_* overrides)
- A clean process-wide log buffer per test
- project.properties and runner result factories
"""

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from suite_reporter.log_buffer import log_collector
from suite_reporter.reporting.record_builder import RunnerResult

PROPERTIES_CONTENT = """\
# identity used by the upload service
project.id=42
user.id=7
project.name=webshop
"""


@pytest.fixture(autouse=True)
def clear_reporter_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SUITE_REPORTER_* variables so the caller's shell never leaks in."""
    for key in list(os.environ.keys()):
        if key.startswith("SUITE_REPORTER_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def clean_log_collector() -> Generator[None, None, None]:
    """Start and end every test with an empty log buffer."""
    log_collector.clear()
    yield
    log_collector.clear()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def properties_file(workdir: Path) -> Path:
    """Write a complete project.properties into the working directory."""
    path = workdir / "project.properties"
    path.write_text(PROPERTIES_CONTENT, encoding="utf-8")
    return path


@pytest.fixture
def make_result() -> Callable[..., RunnerResult]:
    """Factory for runner results with sensible defaults."""

    def _make(method_name: str = "login", **kwargs: object) -> RunnerResult:
        return RunnerResult(method_name=method_name, **kwargs)  # type: ignore[arg-type]

    return _make


class FakeClock:
    """Deterministic epoch-millisecond clock advancing on demand."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def advance(self, millis: int) -> None:
        self.now += millis

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
