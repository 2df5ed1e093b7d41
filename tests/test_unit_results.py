"""
Unit tests for batch reports, error codes and log formatting.
"""

import json
import logging

from acul_samples.core.errors import (
    AuthenticationError,
    BuildError,
    ConfigurationError,
    DiscoveryError,
    ManagementApiError,
    NoMatchError,
    get_exit_code,
)
from acul_samples.core.logging import ConsoleFormatter, StructuredFormatter, set_run_id
from acul_samples.results import BatchReport, ItemResult, ItemStatus


def make_report(*statuses: ItemStatus) -> BatchReport:
    report = BatchReport()
    for i, status in enumerate(statuses):
        report.add(ItemResult(f"screen-{i}", status, reason="boom" if status == ItemStatus.FAILED else None))
    return report


class TestBatchReport:
    def test_placeholders_count_as_succeeded(self):
        report = make_report(ItemStatus.OK, ItemStatus.PLACEHOLDER, ItemStatus.FAILED)
        assert report.summary() == {"succeeded": 2, "failed": 1, "total": 3}

    def test_exit_code(self):
        assert make_report(ItemStatus.OK, ItemStatus.SKIPPED).exit_code == 0
        assert make_report(ItemStatus.OK, ItemStatus.FAILED).exit_code == 1
        assert BatchReport().exit_code == 0

    def test_summary_lines_list_failures(self):
        lines = make_report(ItemStatus.OK, ItemStatus.FAILED).summary_lines("Deployment Summary")
        assert "Deployment Summary" in lines
        assert "  x screen-1: boom" in lines
        assert any(line.strip() == "Total:        2" for line in lines)


class TestExitCodes:
    def test_mapping(self):
        assert get_exit_code(ConfigurationError("x")) == 2
        assert get_exit_code(DiscoveryError("x")) == 3
        assert get_exit_code(NoMatchError("x")) == 3
        assert get_exit_code(AuthenticationError("x")) == 4
        assert get_exit_code(BuildError("x")) == 5
        assert get_exit_code(ManagementApiError("x", status_code=500)) == 1
        assert get_exit_code(RuntimeError("x")) == 1

    def test_details_default_to_empty(self):
        assert ConfigurationError("x").details == {}


class TestFormatters:
    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord("acul", logging.INFO, __file__, 1, "Built %s", ("login",), None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_structured_output(self):
        set_run_id("run123")
        payload = json.loads(StructuredFormatter().format(self._record(screen="login")))
        assert payload["message"] == "Built login"
        assert payload["level"] == "INFO"
        assert payload["run_id"] == "run123"
        assert payload["extra"] == {"screen": "login"}

    def test_console_output(self):
        line = ConsoleFormatter().format(self._record(screen="login"))
        assert line == "INFO    Built login [screen=login]"
