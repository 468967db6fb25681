"""
Create a new daily report.
"""

from typing import List, Optional

from nippou.exceptions.domain import DomainError, DuplicateError
from nippou.exceptions.usecase import DomainViolationError
from nippou.models import (
    Clock,
    Geolocation,
    IdGenerator,
    ReportBuilder,
    ReportRepository,
    Tag,
    VoiceConfig,
)

from .base import ReportUseCase
from .dto import CreateReportInput, ReportOutput


class CreateReportUseCase(ReportUseCase):
    """Validate a request, build the report and persist it."""

    def __init__(
        self,
        repository: ReportRepository,
        id_generator: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
    ):
        super().__init__(repository)
        self.id_generator = id_generator
        self.clock = clock

    def execute(self, request: CreateReportInput) -> ReportOutput:
        """Create and save a report.

        Raises:
            InvalidInputError: The request failed early validation
            DomainViolationError: The domain model rejected a value
            RepositoryOperationError: Saving failed
        """
        request.validate()

        try:
            builder = ReportBuilder(request.date, request.content)
            if request.location is not None:
                builder.with_location(
                    Geolocation.create(
                        request.location.latitude,
                        request.location.longitude,
                        request.location.address,
                    )
                )
            if request.voice is not None:
                builder.with_voice(VoiceConfig.create(request.voice.enabled, request.voice.model_name))
            builder.with_tags(self._build_tags(request.tags))
            if self.id_generator is not None:
                builder.with_id_generator(self.id_generator)
            if self.clock is not None:
                builder.with_clock(self.clock)
            report = builder.build()
        except DomainError as e:
            raise DomainViolationError(e) from e

        self._persist(report)
        self.logger.info("Created report", report_id=report.id.value, date=request.date)
        return ReportOutput.from_report(report)

    @staticmethod
    def _build_tags(raw_tags: List[str]) -> List[Tag]:
        tags: List[Tag] = []
        for raw in raw_tags:
            tag = Tag.create(raw)
            if tag in tags:
                raise DuplicateError("tag", f"duplicate tag: {tag.value}")
            tags.append(tag)
        return tags
