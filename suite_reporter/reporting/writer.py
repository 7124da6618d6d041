# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Artifact writer for the report file and the upload payload.

Two sinks are written at suite end:

- ``Test_Reports/<yyyy-MM-dd_HH-mm-ss>/test-results.json``: the pretty-printed
  report, in a folder named after the local wall-clock time.
- ``<working dir>/payload.json``: the compact upload payload embedding the
  report together with identity metadata from project.properties.

Each sink is best-effort. A failure in one is logged with its traceback and
never prevents the other from being attempted.
"""

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from suite_reporter.config import ReporterSettings, load_project_properties
from suite_reporter.core.constants import (
    FOLDER_TIMESTAMP_FORMAT,
    MISSING_PROPERTY_VALUE,
    PAYLOAD_FILENAME,
    PROJECT_ID_KEY,
    PROJECT_NAME_KEY,
    REPORT_FILENAME,
    REPORT_JSON_INDENT,
    REPORTS_DIRNAME,
    USER_ID_KEY,
)
from suite_reporter.core.errors import ProjectConfigError
from suite_reporter.core.models import Payload, Report

logger = logging.getLogger(__name__)


@dataclass
class EmittedArtifacts:
    """Paths written at suite end; ``None`` marks a sink that failed."""

    report_path: Path | None = None
    payload_path: Path | None = None
    run_timestamp: str | None = None

    @property
    def complete(self) -> bool:
        return self.report_path is not None and self.payload_path is not None


def format_folder_timestamp(moment: datetime | None = None) -> str:
    """Format a local wall-clock moment as ``yyyy-MM-dd_HH-mm-ss``."""
    return (moment or datetime.now()).strftime(FOLDER_TIMESTAMP_FORMAT)


class ArtifactWriter:
    """Writes the report and payload documents for one finished suite."""

    def __init__(self, settings: ReporterSettings | None = None) -> None:
        self.settings = settings or ReporterSettings()

    @property
    def reports_root(self) -> Path:
        return self.settings.resolve_output_dir() / REPORTS_DIRNAME

    def resolve_report_folder(self, folder_timestamp: str) -> Path:
        """Pick the report folder for a timestamp without clobbering older runs.

        Suites finishing within the same second share a timestamp; the second
        one gets a ``_1`` suffix, the third ``_2`` and so on.
        """
        folder = self.reports_root / folder_timestamp
        suffix = 0
        while (folder / REPORT_FILENAME).exists():
            suffix += 1
            folder = self.reports_root / f"{folder_timestamp}_{suffix}"
        if suffix:
            logger.debug(f"Report folder for {folder_timestamp} taken, using {folder}")
        return folder

    def write_report(self, report: Report, folder_timestamp: str) -> Path:
        """Write the pretty-printed report file.

        Args:
            report: The assembled report.
            folder_timestamp: Local timestamp naming the report folder.

        Returns:
            Path to the written test-results.json.

        Raises:
            OSError: If the folder or the file cannot be written.
        """
        folder = self.resolve_report_folder(folder_timestamp)
        folder.mkdir(parents=True, exist_ok=True)

        report_path = folder / REPORT_FILENAME
        report_path.write_text(
            json.dumps(report.to_dict(), indent=REPORT_JSON_INDENT, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info(f"Test report written to {report_path}")
        return report_path

    def build_payload(self, report: Report, run_timestamp: str) -> Payload:
        """Build the upload payload from project.properties and the report.

        Args:
            report: The report to embed.
            run_timestamp: Timestamp appended to the project name in ``run_id``.

        Raises:
            ProjectConfigError: If project.properties is missing, or lacks
                ``project.id`` or ``user.id``.
        """
        properties_path = self.settings.resolve_properties_path()
        try:
            properties = load_project_properties(properties_path)
        except FileNotFoundError as e:
            raise ProjectConfigError(properties_path) from e

        missing = [key for key in (PROJECT_ID_KEY, USER_ID_KEY) if key not in properties]
        if missing:
            raise ProjectConfigError(properties_path, missing)

        project_name = properties.get(PROJECT_NAME_KEY, MISSING_PROPERTY_VALUE)
        return Payload(
            id=str(uuid.uuid4()),
            run_id=f"{project_name}_{run_timestamp}",
            report=report,
            user_id=properties[USER_ID_KEY],
            project_id=properties[PROJECT_ID_KEY],
        )

    def write_payload(self, report: Report, run_timestamp: str) -> Path:
        """Write the compact payload file, overwriting any previous one.

        Returns:
            Path to the written payload.json.

        Raises:
            ProjectConfigError: If the identity metadata cannot be loaded.
            OSError: If the file cannot be written.
        """
        payload = self.build_payload(report, run_timestamp)

        payload_dir = self.settings.resolve_payload_dir()
        payload_dir.mkdir(parents=True, exist_ok=True)
        payload_path = payload_dir / PAYLOAD_FILENAME
        payload_path.write_text(
            json.dumps(payload.to_dict(), separators=(",", ":"), ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info(f"Upload payload written to {payload_path} (run {payload.run_id})")
        return payload_path

    def emit(self, report: Report, now: datetime | None = None) -> EmittedArtifacts:
        """Write both artifacts, each independently best-effort.

        Args:
            report: The assembled report.
            now: Local moment naming the report folder; defaults to now.

        Returns:
            The paths written, ``None`` for a sink that failed.
        """
        folder_timestamp = format_folder_timestamp(now)
        artifacts = EmittedArtifacts(run_timestamp=folder_timestamp)

        try:
            artifacts.report_path = self.write_report(report, folder_timestamp)
            # Same-second collisions get a suffixed folder; keep the run id unique too
            artifacts.run_timestamp = artifacts.report_path.parent.name
        except Exception:
            logger.exception("Failed to write test report")

        try:
            artifacts.payload_path = self.write_payload(report, artifacts.run_timestamp)
        except Exception:
            logger.exception("Failed to write upload payload")

        return artifacts
