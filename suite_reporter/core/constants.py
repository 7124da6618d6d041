# -*- coding: utf-8 -*-

"""Core constants shared across suite-reporter."""

# Report metadata
DEFAULT_BROWSER = "Chrome 128.0"
DEFAULT_PLATFORM = "Windows 11"
PROJECT_NAME = "Automation Project"
ENVIRONMENT_NAME = "QA"

# Environment variables consulted when no explicit option is given
BROWSER_ENV_VAR = "SUITE_REPORTER_BROWSER"
PLATFORM_ENV_VAR = "SUITE_REPORTER_PLATFORM"

# Output layout
REPORTS_DIRNAME = "Test_Reports"
REPORT_FILENAME = "test-results.json"
PAYLOAD_FILENAME = "payload.json"
PROJECT_PROPERTIES_FILENAME = "project.properties"

# project.properties keys
PROJECT_ID_KEY = "project.id"
USER_ID_KEY = "user.id"
PROJECT_NAME_KEY = "project.name"
# Rendered in place of a missing project.name in the run id
MISSING_PROPERTY_VALUE = "null"

# Timestamp formats
EXECUTION_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"  # UTC, offset appended as +HH:MM
FOLDER_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"  # local time

# Runner result attribute carrying a screenshot path
SCREENSHOT_ATTRIBUTE = "screenshot"

REPORT_JSON_INDENT = 2
