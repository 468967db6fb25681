"""
Unit tests for the Report aggregate.
"""

from datetime import date, datetime, timezone

import pytest

from nippou.exceptions.domain import (
    DuplicateError,
    InvalidFormatError,
    LimitExceededError,
    NilReceiverError,
    ValidationError,
)
from nippou.models import Geolocation, Report, ReportId, Tag, VoiceConfig, require_report


@pytest.fixture
def report(build_report, fixed_clock):
    report = build_report()
    fixed_clock.advance(minutes=5)
    return report


class TestReportContent:
    """Test content updates."""

    def test_update_content(self, report, fixed_clock):
        report.update_content("  Revised  ")

        assert report.content == "Revised"
        assert report.updated_at == fixed_clock.now

    def test_failed_update_leaves_state(self, report):
        before = (report.content, report.updated_at)

        with pytest.raises(ValidationError):
            report.update_content("   ")

        assert (report.content, report.updated_at) == before


class TestReportTags:
    """Test tag mutation rules."""

    def test_add_tag_normalizes(self, report):
        tag = report.add_tag(" Sales ")

        assert tag == Tag.create("sales")
        assert report.tag_strings == ["sales"]
        assert report.has_tag("SALES")

    def test_insertion_order_is_kept(self, report):
        for text in ["b", "a", "c"]:
            report.add_tag(text)

        assert report.tag_strings == ["b", "a", "c"]

    def test_duplicate_in_any_casing_fails(self, report):
        report.add_tag("sales")
        updated_at = report.updated_at

        with pytest.raises(DuplicateError):
            report.add_tag("SALES")

        assert report.tag_count() == 1
        assert report.updated_at == updated_at

    def test_twenty_tag_limit(self, build_report):
        report = build_report(tags=[f"tag{i}" for i in range(20)])
        updated_at = report.updated_at

        with pytest.raises(LimitExceededError):
            report.add_tag("new")

        assert report.tag_count() == 20
        assert report.updated_at == updated_at

    def test_format_error_takes_precedence_over_limit(self, build_report):
        report = build_report(tags=[f"tag{i}" for i in range(20)])

        with pytest.raises(InvalidFormatError):
            report.add_tag("bad tag")

    def test_limit_takes_precedence_over_duplicate(self, build_report):
        report = build_report(tags=[f"tag{i}" for i in range(20)])

        with pytest.raises(LimitExceededError):
            report.add_tag("tag0")

    def test_remove_tag(self, report):
        report.add_tag("sales")

        assert report.remove_tag("SALES") is True
        assert report.tags == ()

    def test_remove_missing_tag_is_noop(self, report):
        updated_at = report.updated_at

        assert report.remove_tag("never-added") is False
        assert report.updated_at == updated_at

    def test_remove_malformed_tag_fails(self, report):
        report.add_tag("sales")
        updated_at = report.updated_at

        with pytest.raises(InvalidFormatError):
            report.remove_tag("bad tag")

        assert report.tag_strings == ["sales"]
        assert report.updated_at == updated_at

    def test_has_tag_with_malformed_text(self, report):
        assert report.has_tag("bad tag") is False
        assert report.has_tag("") is False

    def test_tags_are_a_snapshot(self, report):
        report.add_tag("sales")
        snapshot = report.tags
        report.add_tag("osaka")

        assert snapshot == (Tag.create("sales"),)
        assert isinstance(report.tags, tuple)


class TestReportLocationAndVoice:
    """Test optional value object updates."""

    def test_attach_and_remove_location(self, report):
        report.attach_location(35.0, 139.0, "Tokyo")
        assert report.location == Geolocation.create(35.0, 139.0, "Tokyo")

        report.remove_location()
        assert report.location is None

    def test_attach_invalid_location_keeps_previous(self, report):
        report.attach_location(35.0, 139.0)
        previous = report.location
        updated_at = report.updated_at

        with pytest.raises(ValidationError):
            report.attach_location(91, 0)

        assert report.location == previous
        assert report.updated_at == updated_at

    def test_set_voice_config(self, report):
        report.set_voice_config(False, "")
        assert report.voice == VoiceConfig.disabled()
        updated_at = report.updated_at

        with pytest.raises(ValidationError) as exc_info:
            report.set_voice_config(True, "")
        assert exc_info.value.field == "modelName"
        assert report.voice == VoiceConfig.disabled()
        assert report.updated_at == updated_at

    def test_set_and_remove_voice(self, report):
        voice = VoiceConfig.create(True, "whisper-1")
        report.set_voice(voice)
        assert report.voice == voice

        report.remove_voice()
        assert report.voice is None

    @pytest.mark.parametrize("value", ["Tokyo", (35.0, 139.0), VoiceConfig.disabled()])
    def test_set_location_rejects_other_types(self, report, value):
        report.attach_location(35.0, 139.0)
        before = (report.location, report.updated_at)

        with pytest.raises(ValidationError) as exc_info:
            report.set_location(value)

        assert exc_info.value.field == "location"
        assert (report.location, report.updated_at) == before

    @pytest.mark.parametrize("value", ["whisper-1", True, Geolocation.create(1, 2)])
    def test_set_voice_rejects_other_types(self, report, value):
        updated_at = report.updated_at

        with pytest.raises(ValidationError) as exc_info:
            report.set_voice(value)

        assert exc_info.value.field == "voice"
        assert report.voice is None
        assert report.updated_at == updated_at


class TestReportConstruction:
    """Test that a directly constructed report is still valid."""

    @pytest.fixture
    def fields(self, fixed_clock):
        return {
            "report_id": ReportId.parse("123e4567-e89b-12d3-a456-426614174000"),
            "report_date": date(2026, 1, 8),
            "content": "Visited the Osaka office",
            "created_at": fixed_clock.now,
            "updated_at": fixed_clock.now,
        }

    def test_text_tags_are_normalized(self, fields):
        report = Report(**fields, tags=[" Sales ", Tag.create("osaka")])

        assert report.tag_strings == ["sales", "osaka"]
        assert all(isinstance(tag, Tag) for tag in report.tags)
        assert "sales" in repr(report)

    @pytest.mark.parametrize(
        "tags,error",
        [
            (["bad tag"], InvalidFormatError),
            ([42], ValidationError),
            (["sales", "SALES"], DuplicateError),
            ([f"tag{i}" for i in range(21)], LimitExceededError),
        ],
    )
    def test_invalid_tags_rejected(self, fields, tags, error):
        with pytest.raises(error):
            Report(**fields, tags=tags)

    def test_wrong_location_and_voice_types_rejected(self, fields):
        with pytest.raises(ValidationError) as exc_info:
            Report(**fields, location="Tokyo")
        assert exc_info.value.field == "location"

        with pytest.raises(ValidationError) as exc_info:
            Report(**fields, voice={"enabled": True})
        assert exc_info.value.field == "voice"


class TestReportTimestamps:
    """Test that updated_at advances on every successful mutation."""

    def test_frozen_clock_still_advances(self, report):
        mutations = [
            lambda: report.update_content("again"),
            lambda: report.add_tag("x"),
            lambda: report.remove_tag("x"),
            lambda: report.attach_location(1, 2),
            lambda: report.remove_location(),
            lambda: report.set_voice_config(True, "m"),
            lambda: report.remove_voice(),
        ]

        for mutate in mutations:
            before = report.updated_at
            mutate()
            assert report.updated_at > before

    def test_clock_behind_updated_at(self, build_report, fixed_clock):
        report = build_report()
        fixed_clock.now = datetime(2020, 1, 1, tzinfo=timezone.utc)
        before = report.updated_at

        report.update_content("later")

        assert report.updated_at > before

    def test_created_at_never_changes(self, report):
        created_at = report.created_at
        report.update_content("changed")

        assert report.created_at == created_at


class TestRequireReport:
    """Test explicit handling of an absent report."""

    def test_absent_report_raises(self):
        with pytest.raises(NilReceiverError) as exc_info:
            require_report(None)

        assert exc_info.value.field == "report"

    def test_present_report_is_returned(self, report):
        assert require_report(report) is report
