"""Local interview operations: add, advance to the next stage, calendar helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC
from typing import TYPE_CHECKING, Final, cast

from interviewdesk.domain.model import (
    Company,
    Interview,
    InterviewMetadata,
    InterviewOutcome,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime

    from interviewdesk.domain.model import ReferenceEntity, StageMethod
    from interviewdesk.domain.ports.persistence import ReferenceRepository
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)

APPLIED_STAGE: Final[str] = "Applied"
TECHNICAL_TEST_STAGE: Final[str] = "Technical Test"
METHOD_TYPE_KEY: Final[str] = "methodType"
STAGE_KEY: Final[str] = "stage"


class InterviewNotFoundError(LookupError):
    def __init__(self, interview_id: int) -> None:
        super().__init__(f"No interview with id {interview_id}")
        self.interview_id = interview_id


class UnknownReferenceError(ValueError):
    """A stage or stage method name that matches no local row."""


@dataclass(slots=True, kw_only=True)
class InterviewDraft:
    company_name: str
    job_title: str
    application_date: datetime | None = None
    stage_name: str | None = APPLIED_STAGE
    stage_method_name: str | None = None
    client_company: str | None = None
    interviewer: str | None = None
    date: datetime | None = None
    deadline: datetime | None = None
    outcome: InterviewOutcome | None = None
    notes: str | None = None
    link: str | None = None
    job_listing: str | None = None
    location: str | None = None


@dataclass(slots=True, kw_only=True)
class NextStage:
    stage_name: str
    stage_method_name: str | None = None
    date: datetime | None = None
    deadline: datetime | None = None
    interviewer: str | None = None
    link: str | None = None
    notes: str | None = None


def _by_name[TReference: ReferenceEntity](
    repository: ReferenceRepository[TReference],
    name: str,
    label: str,
) -> TReference:
    matches = repository.find_by_name(name)
    if not matches:
        raise UnknownReferenceError(f"Unknown {label} {name!r}")
    return matches[0]


def add_interview(uow: TrackerUnitOfWork, draft: InterviewDraft) -> Interview:
    """Insert and commit a new interview inside an entered unit of work.

    The company is matched by exact name and created guest-local when missing.
    """

    if not draft.job_title.strip():
        raise ValueError("Job title must not be empty")

    repositories = uow.repositories
    companies = repositories.companies.find_by_name(draft.company_name)
    if companies:
        company = companies[0]
    else:
        company = Company(name=draft.company_name)
        repositories.companies.add(company)
        log.debug("Created local company %r", draft.company_name)

    stage = (
        _by_name(repositories.stages, draft.stage_name, "stage") if draft.stage_name else None
    )
    method = (
        _by_name(repositories.stage_methods, draft.stage_method_name, "stage method")
        if draft.stage_method_name
        else None
    )

    interview = Interview(
        company=company,
        job_title=draft.job_title,
        application_date=draft.application_date or utcnow(),
        stage=stage,
        stage_method=method,
        client_company=draft.client_company,
        interviewer=draft.interviewer,
        date=draft.date,
        deadline=draft.deadline,
        outcome=draft.outcome,
        notes=draft.notes,
        link=draft.link,
        job_posting_link=draft.job_listing,
        meta=InterviewMetadata(job_listing=draft.job_listing, location=draft.location),
    )
    repositories.interviews.add(interview)
    uow.commit()
    return interview


def advance_to_next_stage(
    uow: TrackerUnitOfWork,
    interview_id: int,
    next_stage: NextStage,
) -> Interview:
    """Mark ``interview_id`` as passed and record the following stage as a new interview.

    Any stage but "Applied" may follow. A stage method is required except for
    "Technical Test", which is usually a take-home with a deadline.
    """

    repositories = uow.repositories
    previous = repositories.interviews.get(interview_id)
    if previous is None:
        raise InterviewNotFoundError(interview_id)

    if next_stage.stage_name == APPLIED_STAGE:
        raise ValueError(f"Cannot advance an interview back to {APPLIED_STAGE!r}")
    stage = _by_name(repositories.stages, next_stage.stage_name, "stage")

    method: StageMethod | None = None
    if next_stage.stage_method_name:
        method = _by_name(
            repositories.stage_methods, next_stage.stage_method_name, "stage method"
        )
    elif stage.name != TECHNICAL_TEST_STAGE:
        raise ValueError(f"Stage {stage.name!r} requires a stage method")

    previous.outcome = InterviewOutcome.PASSED
    previous.touch()

    extra: dict[str, object] = {STAGE_KEY: stage.name}
    if method is not None:
        extra[METHOD_TYPE_KEY] = method.name
    meta = previous.meta.merged(**extra)
    if meta.job_listing is None:
        meta.job_listing = previous.job_listing

    interview = Interview(
        company=previous.company,
        client_company=previous.client_company,
        job_title=previous.job_title,
        application_date=previous.application_date,
        user_id=previous.user_id,
        job_posting_link=previous.job_posting_link,
        stage=stage,
        stage_method=method,
        interviewer=next_stage.interviewer,
        date=next_stage.date,
        deadline=next_stage.deadline,
        outcome=InterviewOutcome.SCHEDULED if next_stage.date is not None else None,
        notes=next_stage.notes,
        link=next_stage.link,
        meta=meta,
    )
    repositories.interviews.add(interview)
    uow.commit()
    return interview


def sort_by_display_date(interviews: Iterable[Interview]) -> list[Interview]:
    """Chronological order by display date; undated interviews go last."""

    items = list(interviews)
    dated = [item for item in items if item.display_date is not None]
    undated = [item for item in items if item.display_date is None]
    dated.sort(
        key=lambda item: (_as_utc(cast("datetime", item.display_date)), _as_utc(item.created_at))
    )
    undated.sort(key=lambda item: _as_utc(item.created_at))
    return dated + undated


def _as_utc(value: datetime) -> datetime:
    # naive values are taken as UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def interviews_on(interviews: Iterable[Interview], day: date) -> list[Interview]:
    """Interviews whose display date falls on ``day`` (UTC), in chronological order."""

    return sort_by_display_date(
        interview
        for interview in interviews
        if interview.display_date is not None and interview.display_date.date() == day
    )
