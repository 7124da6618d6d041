# -*- coding: utf-8 -*-

"""Suite aggregation and report emission for suite-reporter."""

from suite_reporter.reporting.aggregator import SuiteAggregator, SuiteResult
from suite_reporter.reporting.assembler import assemble_report, summarize
from suite_reporter.reporting.record_builder import (
    Failure,
    RunnerResult,
    build_test_record,
)
from suite_reporter.reporting.writer import ArtifactWriter, EmittedArtifacts

__all__ = [
    "ArtifactWriter",
    "EmittedArtifacts",
    "Failure",
    "RunnerResult",
    "SuiteAggregator",
    "SuiteResult",
    "assemble_report",
    "build_test_record",
    "summarize",
]
