"""Interview pipeline entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, ClassVar, cast

from interviewdesk.domain.model.base import Entity, ReferenceEntity, utcnow
from interviewdesk.domain.model.enums import InterviewOutcome, ReferenceKind

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

JOB_LISTING_KEY = "jobListing"
LOCATION_KEY = "location"


@dataclass(eq=False, kw_only=True)
class Company(ReferenceEntity):
    KIND: ClassVar[ReferenceKind] = ReferenceKind.COMPANY

    user_id: int | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Company name must not be empty")


@dataclass(eq=False, kw_only=True)
class Stage(ReferenceEntity):
    KIND: ClassVar[ReferenceKind] = ReferenceKind.STAGE


@dataclass(eq=False, kw_only=True)
class StageMethod(ReferenceEntity):
    KIND: ClassVar[ReferenceKind] = ReferenceKind.STAGE_METHOD


@dataclass(slots=True)
class InterviewMetadata:
    """Structured view of the metadata document carried through API round trips.

    Keys other than ``jobListing`` and ``location`` are kept in ``extra`` and
    written back unchanged.
    """

    job_listing: str | None = None
    location: str | None = None
    extra: dict[str, Any] = field(default_factory=dict[str, Any])

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object] | None) -> InterviewMetadata:
        if not payload:
            return cls()
        extra = {
            str(key): value
            for key, value in payload.items()
            if key not in {JOB_LISTING_KEY, LOCATION_KEY}
        }
        return cls(
            job_listing=_optional_str(payload.get(JOB_LISTING_KEY), JOB_LISTING_KEY),
            location=_optional_str(payload.get(LOCATION_KEY), LOCATION_KEY),
            extra=extra,
        )

    def to_mapping(self) -> dict[str, Any]:
        payload: dict[str, Any] = dict(self.extra)
        if self.job_listing is not None:
            payload[JOB_LISTING_KEY] = self.job_listing
        if self.location is not None:
            payload[LOCATION_KEY] = self.location
        return payload

    def merged(self, **extra: object) -> InterviewMetadata:
        """Return a copy with ``extra`` keys added or replaced."""
        combined = dict(self.extra)
        combined.update(extra)
        return InterviewMetadata(
            job_listing=self.job_listing,
            location=self.location,
            extra=combined,
        )

    def is_empty(self) -> bool:
        return self.job_listing is None and self.location is None and not self.extra


def _optional_str(value: object, key: str) -> str | None:
    if value is None or isinstance(value, str):
        return cast("str | None", value)
    log.warning("Ignoring non-string metadata value for %s: %r", key, value)
    return None


@dataclass(eq=False, kw_only=True)
class Interview(Entity):
    """One step of an application: applied, screened, interviewed, offered..."""

    company: Company
    job_title: str
    application_date: datetime
    stage: Stage | None = None
    stage_method: StageMethod | None = None
    client_company: str | None = None
    interviewer: str | None = None
    user_id: int | None = None
    date: datetime | None = None
    deadline: datetime | None = None
    outcome: InterviewOutcome | None = None
    notes: str | None = None
    link: str | None = None
    job_posting_link: str | None = None
    meta: InterviewMetadata = field(default_factory=InterviewMetadata)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def display_date(self) -> datetime | None:
        """Date used for ordering and calendar placement: ``date``, else ``deadline``."""
        return self.date or self.deadline

    @property
    def job_listing(self) -> str | None:
        return self.meta.job_listing or self.job_posting_link

    def reference(self, kind: ReferenceKind) -> ReferenceEntity | None:
        return cast("ReferenceEntity | None", getattr(self, kind.interview_attribute))

    def set_reference(self, kind: ReferenceKind, entity: ReferenceEntity) -> None:
        setattr(self, kind.interview_attribute, entity)

    def touch(self) -> None:
        self.updated_at = utcnow()
