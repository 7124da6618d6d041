# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Log buffer shared between test code and the report listener.

Test code appends lines while a test runs; the listener takes a snapshot when
the test finishes and clears the buffer before the next test starts. The
buffer is shared by every thread of the process, so lines logged from helper
threads a test starts belong to that test.
"""

import logging
import threading

# Loggers below this prefix belong to the reporter itself and never reach the buffer
_OWN_LOGGER_PREFIX = __name__.split(".")[0]


class LogCollector:
    """Ordered buffer of log lines for the test currently running."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def append(self, line: str) -> None:
        """Append one line to the buffer."""
        with self._lock:
            self._lines.append(str(line))

    def snapshot(self) -> list[str]:
        """Return an independent copy of the collected lines."""
        with self._lock:
            return list(self._lines)

    def clear(self) -> None:
        """Drop every collected line."""
        with self._lock:
            self._lines.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)


class LogCollectorHandler(logging.Handler):
    """Logging handler that appends formatted records to a LogCollector.

    Records emitted by suite_reporter's own loggers are ignored so reporter
    diagnostics never end up inside a test's logs.
    """

    def __init__(
        self, collector: "LogCollector | None" = None, level: int = logging.NOTSET
    ) -> None:
        super().__init__(level)
        self.collector = collector if collector is not None else log_collector
        self.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == _OWN_LOGGER_PREFIX or name.startswith(f"{_OWN_LOGGER_PREFIX}."):
            return False
        return bool(super().filter(record))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.collector.append(self.format(record))
        except Exception:
            self.handleError(record)


# Process-wide collector used by the listeners unless one is injected
log_collector = LogCollector()
