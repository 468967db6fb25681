"""
Tests for NippouLogger and the JSON formatter.
"""

import json
import logging
import sys

from nippou.logging import NippouLogger, StructuredFormatter


class TestNippouLogger:
    """Test context propagation onto log records."""

    def test_keyword_context_on_record(self, caplog):
        logger = NippouLogger("nippou.tests", correlation_id="abc12345")

        with caplog.at_level(logging.INFO, logger="nippou.tests"):
            logger.info("Saved report", report_id="r-1")

        record = caplog.records[-1]
        assert record.getMessage() == "Saved report"
        assert record.correlation_id == "abc12345"
        assert record.extra_context == {"report_id": "r-1"}

    def test_generated_correlation_id(self):
        assert len(NippouLogger("nippou.tests").correlation_id) == 8

    def test_bound_context_merged_with_call_context(self, caplog):
        logger = NippouLogger("nippou.tests").with_context(backend="memory")

        with caplog.at_level(logging.DEBUG, logger="nippou.tests"):
            logger.debug("loaded", report_id="r-1")

        assert caplog.records[-1].extra_context == {"backend": "memory", "report_id": "r-1"}

    def test_with_context_copies(self):
        logger = NippouLogger("nippou.tests")
        child = logger.with_context(report_id="r-1")

        assert child.correlation_id == logger.correlation_id
        assert child.extra_context == {"report_id": "r-1"}
        assert logger.extra_context == {}

    def test_level_filtering(self, caplog):
        logger = NippouLogger("nippou.tests")

        with caplog.at_level(logging.WARNING, logger="nippou.tests"):
            logger.info("hidden")
            logger.warning("shown")

        assert [r.getMessage() for r in caplog.records] == ["shown"]


class TestStructuredFormatter:
    """Test JSON log entries."""

    def _record(self, **attributes):
        record = logging.LogRecord("nippou.tests", logging.ERROR, __file__, 10, "failed %s", ("save",), None)
        for name, value in attributes.items():
            setattr(record, name, value)
        return record

    def test_entry_fields(self):
        formatter = StructuredFormatter(service_name="nippou-cli", version="0.1.0")

        entry = json.loads(
            formatter.format(self._record(correlation_id="abc", extra_context={"report_id": "r-1"}))
        )

        assert entry["message"] == "failed save"
        assert entry["level"] == "ERROR"
        assert entry["service"] == "nippou-cli"
        assert entry["version"] == "0.1.0"
        assert entry["correlation_id"] == "abc"
        assert entry["report_id"] == "r-1"

    def test_exception_details(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = self._record(exc_info=sys.exc_info())

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "boom"

    def test_non_ascii_kept(self):
        entry = StructuredFormatter().format(self._record(extra_context={"content": "大阪"}))

        assert "大阪" in entry

    def test_credentials_redacted(self):
        entry = json.loads(
            StructuredFormatter().format(self._record(extra_context={"access_token": "abcd", "report_id": "r-1"}))
        )

        assert entry["access_token"] == "[REDACTED_4_CHARS]"
        assert entry["report_id"] == "r-1"
