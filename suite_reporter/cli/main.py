# -*- coding: utf-8 -*-

# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

import json
import logging
from pathlib import Path
from typing import Optional

import errorhandler
import typer
from typing_extensions import Annotated

import suite_reporter
from suite_reporter.config import ReporterSettings
from suite_reporter.core.errors import ReportEmissionError
from suite_reporter.core.models import Report
from suite_reporter.reporting.writer import ArtifactWriter
from suite_reporter.utils.logging import VerbosityLevel, configure_logging

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)

error_handler = errorhandler.ErrorHandler()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"suite-reporter, version {suite_reporter.__version__}")
        raise typer.Exit()


Verbosity = Annotated[
    VerbosityLevel,
    typer.Option(
        "-v",
        "--verbosity",
        help="Verbosity level.",
        envvar="SUITE_REPORTER_VERBOSITY",
        is_eager=True,
    ),
]


Version = Annotated[
    bool,
    typer.Option(
        "--version",
        callback=version_callback,
        help="Display version number.",
        is_eager=True,
    ),
]


ReportFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Path to a test-results.json report.",
    ),
]


Properties = Annotated[
    Optional[Path],
    typer.Option(
        "-p",
        "--properties",
        dir_okay=False,
        file_okay=True,
        help="Path to project.properties (default: ./project.properties).",
        envvar="SUITE_REPORTER_PROPERTIES",
    ),
]


Output = Annotated[
    Optional[Path],
    typer.Option(
        "-o",
        "--output",
        dir_okay=True,
        file_okay=False,
        help="Directory receiving payload.json (default: current directory).",
        envvar="SUITE_REPORTER_OUTPUT",
    ),
]


@app.callback()
def main(
    verbosity: Verbosity = VerbosityLevel.WARNING,
    version: Version = False,
) -> None:
    """Inspect suite reports and rebuild their upload payloads."""
    configure_logging(verbosity, error_handler)


def load_report(path: Path) -> Report | None:
    try:
        return Report.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Cannot read report {path}: {e}")
        return None


@app.command()
def payload(
    report: ReportFile,
    properties: Properties = None,
    output: Output = None,
) -> None:
    """Rebuild payload.json from an existing test-results.json.

    The report folder name is used as the run timestamp of the run id.
    """
    parsed = load_report(report)
    if parsed is not None:
        writer = ArtifactWriter(
            ReporterSettings(properties_path=properties, payload_dir=output)
        )
        try:
            payload_path = writer.write_payload(parsed, report.resolve().parent.name)
            typer.echo(f"Payload written to {payload_path}")
        except (ReportEmissionError, OSError) as e:
            logger.error(f"Failed to write payload: {e}")
    exit()


@app.command()
def summary(report: ReportFile) -> None:
    """Print the summary of a test-results.json report."""
    parsed = load_report(report)
    if parsed is not None:
        counts = parsed.summary
        typer.echo(f"Project:     {parsed.project} ({parsed.environment})")
        typer.echo(f"Executed:    {parsed.execution_date}")
        typer.echo(f"Browser:     {parsed.browser} on {parsed.platform}")
        typer.echo(
            f"Tests:       {counts.total_tests} total, {counts.passed} passed, "
            f"{counts.failed} failed, {counts.skipped} skipped"
        )
        typer.echo(f"Duration:    {counts.total_execution_time_ms} ms")
        for test in parsed.tests:
            if test.error is not None:
                typer.echo(
                    f"  FAILED {test.test_name}: {test.error.type}: "
                    f"{test.error.message or ''}"
                )
    exit()


def exit() -> None:
    if error_handler.fired:
        raise typer.Exit(1)
    else:
        raise typer.Exit(0)
