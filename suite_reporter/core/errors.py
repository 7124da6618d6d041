# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Exceptions raised while emitting report artifacts."""

from pathlib import Path


class ReportEmissionError(Exception):
    """Base class for errors raised while writing report artifacts."""


class ProjectConfigError(ReportEmissionError):
    """Raised when project.properties is missing or lacks required keys."""

    def __init__(self, path: Path, missing_keys: list[str] | None = None) -> None:
        self.path = path
        self.missing_keys = missing_keys or []
        if self.missing_keys:
            message = f"{' or '.join(self.missing_keys)} not found in {path}"
        else:
            message = f"Project properties file not found: {path}"
        super().__init__(message)
