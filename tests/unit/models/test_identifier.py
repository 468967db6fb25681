"""
Unit tests for report identifiers.
"""

import uuid

import pytest

from nippou.exceptions.domain import ErrorKind, InvalidFormatError, ValidationError
from nippou.models import DEFAULT_ID_GENERATOR, ReportId, UUIDGenerator, new_report_id


class TestReportIdParse:
    """Test parsing identifiers from text."""

    def test_parse_valid_uuid_keeps_text(self):
        text = "123e4567-e89b-12d3-a456-426614174000"
        report_id = ReportId.parse(text)

        assert report_id.value == text
        assert str(report_id) == text
        assert not report_id.is_empty()

    def test_parse_empty_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            ReportId.parse("")

        assert exc_info.value.field == "id"
        assert exc_info.value.kind == ErrorKind.VALIDATION

    @pytest.mark.parametrize("text", ["not-a-uuid", "123", "123e4567-e89b-12d3-a456-42661417400z"])
    def test_parse_malformed_is_invalid_format(self, text):
        with pytest.raises(InvalidFormatError) as exc_info:
            ReportId.parse(text)

        assert exc_info.value.field == "id"


class TestReportIdEquality:
    """Test value semantics."""

    def test_equal_values_are_equal(self):
        a = ReportId.parse("123e4567-e89b-12d3-a456-426614174000")
        b = ReportId.parse("123e4567-e89b-12d3-a456-426614174000")

        assert a == b
        assert a.equals(b)
        assert hash(a) == hash(b)

    def test_empty_id(self):
        assert ReportId.empty().is_empty()


class TestGenerators:
    """Test identifier generation."""

    def test_uuid_generator_produces_distinct_canonical_ids(self):
        generator = UUIDGenerator()
        first = generator.generate()
        second = generator.generate()

        assert first != second
        assert str(uuid.UUID(first.value)) == first.value

    def test_default_generator(self):
        assert isinstance(DEFAULT_ID_GENERATOR.generate(), ReportId)
        assert not new_report_id().is_empty()
