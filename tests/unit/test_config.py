# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Unit tests for reporter configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from suite_reporter.config import (
    ReporterSettings,
    host_os_name,
    load_project_properties,
    parse_properties,
)


class TestParseProperties:
    def test_equals_and_colon_separators(self) -> None:
        text = "project.id=42\nuser.id: 7\nproject.name = web shop\n"
        assert parse_properties(text) == {
            "project.id": "42",
            "user.id": "7",
            "project.name": "web shop",
        }

    def test_comments_and_blank_lines_ignored(self) -> None:
        text = "# comment\n! another\n\nproject.id=1\n"
        assert parse_properties(text) == {"project.id": "1"}

    def test_value_may_contain_separator(self) -> None:
        assert parse_properties("url=http://host:8080/a=b") == {
            "url": "http://host:8080/a=b"
        }

    def test_later_keys_override(self) -> None:
        assert parse_properties("a=1\na=2") == {"a": "2"}

    def test_bare_key_has_empty_value(self) -> None:
        assert parse_properties("flag") == {"flag": ""}

    def test_whitespace_separator(self) -> None:
        text = "project.id 42\nuser.id\t7\nproject.name   web shop\n"
        assert parse_properties(text) == {
            "project.id": "42",
            "user.id": "7",
            "project.name": "web shop",
        }

    def test_whitespace_before_equals_is_not_part_of_value(self) -> None:
        assert parse_properties("project.id  =  42") == {"project.id": "42"}


def test_load_project_properties_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_project_properties(tmp_path / "project.properties")


class TestReporterSettings:
    def test_browser_default(self) -> None:
        assert ReporterSettings().resolve_browser() == "Chrome 128.0"

    def test_browser_env_then_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUITE_REPORTER_BROWSER", "Firefox 130.0")
        assert ReporterSettings().resolve_browser() == "Firefox 130.0"
        assert ReporterSettings(browser="Edge 127").resolve_browser() == "Edge 127"

    def test_blank_override_falls_through(self) -> None:
        assert ReporterSettings(browser="  ").resolve_browser() == "Chrome 128.0"

    def test_platform_env_then_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUITE_REPORTER_PLATFORM", "macOS 14")
        assert ReporterSettings().resolve_platform() == "macOS 14"
        assert ReporterSettings(platform="Ubuntu").resolve_platform() == "Ubuntu"

    def test_platform_from_host(self) -> None:
        with patch("suite_reporter.config.platform.system", return_value="Linux"):
            assert ReporterSettings().resolve_platform() == "Linux"

    def test_platform_literal_fallback(self) -> None:
        with patch("suite_reporter.config.platform.system", return_value=""):
            assert ReporterSettings().resolve_platform() == "Windows 11"

    def test_paths_default_to_working_dir(self, workdir: Path) -> None:
        settings = ReporterSettings()
        assert settings.resolve_output_dir() == workdir
        assert settings.resolve_payload_dir() == workdir
        assert settings.resolve_properties_path() == workdir / "project.properties"

    def test_explicit_paths(self, tmp_path: Path) -> None:
        settings = ReporterSettings(
            output_dir=tmp_path / "out", properties_path=tmp_path / "p.properties"
        )
        assert settings.resolve_output_dir() == tmp_path / "out"
        assert settings.resolve_properties_path() == tmp_path / "p.properties"


def test_host_os_name_windows_includes_release() -> None:
    with (
        patch("suite_reporter.config.platform.system", return_value="Windows"),
        patch("suite_reporter.config.platform.release", return_value="11"),
    ):
        assert host_os_name() == "Windows 11"
