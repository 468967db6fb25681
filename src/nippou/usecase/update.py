"""
Modify an existing report.
"""

from nippou.exceptions.domain import DomainError
from nippou.exceptions.usecase import DomainViolationError
from nippou.models import Report

from .base import ReportUseCase
from .dto import ReportOutput, UpdateReportInput


class UpdateReportUseCase(ReportUseCase):
    """Apply content, tag, location and voice changes, then save.

    Changes are applied in this order: content, removed tags, added tags,
    location, voice. A rejected change aborts the whole request before
    anything is saved.
    """

    def execute(self, request: UpdateReportInput) -> ReportOutput:
        request.validate()
        report = self._load(self._parse_id(request.report_id))

        try:
            self._apply(report, request)
        except DomainError as e:
            raise DomainViolationError(e) from e

        self._persist(report)
        self.logger.info("Updated report", report_id=report.id.value)
        return ReportOutput.from_report(report)

    @staticmethod
    def _apply(report: Report, request: UpdateReportInput) -> None:
        if request.content is not None:
            report.update_content(request.content)

        for text in request.remove_tags:
            report.remove_tag(text)
        for text in request.add_tags:
            report.add_tag(text)

        if request.remove_location:
            report.remove_location()
        elif request.location is not None:
            report.attach_location(
                request.location.latitude,
                request.location.longitude,
                request.location.address,
            )

        if request.remove_voice:
            report.remove_voice()
        elif request.voice is not None:
            report.set_voice_config(request.voice.enabled, request.voice.model_name)
