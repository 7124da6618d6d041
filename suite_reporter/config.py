# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Configuration for the report listener.

Values are resolved in a fixed order: an explicit option given by the host
runner, then the matching ``SUITE_REPORTER_*`` environment variable (or the
host OS for the platform), then the built-in default.
"""

import logging
import os
import platform
import re
from dataclasses import dataclass
from pathlib import Path

from suite_reporter.core.constants import (
    BROWSER_ENV_VAR,
    DEFAULT_BROWSER,
    DEFAULT_PLATFORM,
    PLATFORM_ENV_VAR,
    PROJECT_PROPERTIES_FILENAME,
)

logger = logging.getLogger(__name__)


def host_os_name() -> str | None:
    """Return the host operating system name, e.g. ``Linux`` or ``Windows 11``."""
    system = platform.system()
    if not system:
        return None
    if system == "Windows":
        release = platform.release()
        return f"{system} {release}" if release else system
    return system


def _first_set(*values: str | None) -> str | None:
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None


@dataclass
class ReporterSettings:
    """Runtime options consumed by the report assembler and artifact writer.

    Attributes:
        browser: Explicit browser label override.
        platform: Explicit platform label override.
        output_dir: Directory holding ``Test_Reports`` (defaults to cwd).
        properties_path: Path to project.properties (defaults to cwd).
        payload_dir: Directory receiving payload.json (defaults to cwd).
    """

    browser: str | None = None
    platform: str | None = None
    output_dir: Path | None = None
    properties_path: Path | None = None
    payload_dir: Path | None = None

    def resolve_browser(self) -> str:
        return (
            _first_set(self.browser, os.environ.get(BROWSER_ENV_VAR))
            or DEFAULT_BROWSER
        )

    def resolve_platform(self) -> str:
        return (
            _first_set(self.platform, os.environ.get(PLATFORM_ENV_VAR), host_os_name())
            or DEFAULT_PLATFORM
        )

    @property
    def working_dir(self) -> Path:
        return Path.cwd()

    def resolve_output_dir(self) -> Path:
        return Path(self.output_dir) if self.output_dir else self.working_dir

    def resolve_properties_path(self) -> Path:
        if self.properties_path:
            return Path(self.properties_path)
        return self.working_dir / PROJECT_PROPERTIES_FILENAME

    def resolve_payload_dir(self) -> Path:
        return Path(self.payload_dir) if self.payload_dir else self.working_dir


# Key ends at the first "=", ":" or whitespace; one "=" or ":" may follow the whitespace
_PROPERTY_LINE = re.compile(r"([^=:\s]*)\s*[=:]?(.*)")


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style properties text.

    Supports ``key=value``, ``key: value`` and ``key value`` lines, ``#``/``!``
    comments and blank lines. Keys and values are stripped; later keys override
    earlier ones and a bare key has an empty value.

    Args:
        text: Contents of a properties file.

    Returns:
        Mapping of property names to values.
    """
    properties: dict[str, str] = {}
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue

        key, value = _PROPERTY_LINE.match(line).groups()
        if not key:
            logger.debug(f"Ignoring property line {lineno} without a key: {raw_line}")
            continue
        properties[key] = value.strip()
    return properties


def load_project_properties(path: Path) -> dict[str, str]:
    """Load a project.properties file.

    Args:
        path: Path to the properties file.

    Returns:
        Parsed properties.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    logger.debug(f"Loading project properties from {path}")
    return parse_properties(Path(path).read_text(encoding="utf-8"))
