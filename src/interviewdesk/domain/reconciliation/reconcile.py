"""Merge the server's catalog into the local store.

Order is fixed: companies, stages, stage methods, then interviews. Each kind
is committed before the next one is fetched so interviews can resolve their
references; a failing fetch stops the pass but keeps earlier commits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from interviewdesk.domain.model import (
    REFERENCE_CLASS_BY_KIND,
    Interview,
    InterviewMetadata,
    ReferenceKind,
    utcnow,
)
from interviewdesk.domain.ports.remote import InterviewQuery
from interviewdesk.domain.reconciliation.parsing import parse_datetime, parse_outcome

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from interviewdesk.domain.model import Company, ReferenceEntity, Stage, StageMethod
    from interviewdesk.domain.ports.remote import RemoteClient, RemoteInterview, RemoteReference
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)

REFERENCE_ORDER: tuple[ReferenceKind, ...] = (
    ReferenceKind.COMPANY,
    ReferenceKind.STAGE,
    ReferenceKind.STAGE_METHOD,
)


@dataclass(slots=True)
class MergeCounts:
    inserted: int = 0
    updated: int = 0


@dataclass(slots=True)
class ReconcileResult:
    """Per-kind counts of one reconcile pass."""

    references: dict[ReferenceKind, MergeCounts] = field(
        default_factory=dict[ReferenceKind, MergeCounts]
    )
    interviews: MergeCounts = field(default_factory=MergeCounts)
    skipped_interviews: int = 0

    def counts(self, kind: ReferenceKind) -> MergeCounts:
        return self.references.setdefault(kind, MergeCounts())


class Reconciler:
    """Remote-wins merge keyed by remote identity. Guest-local rows are never touched."""

    def __init__(
        self,
        *,
        client: RemoteClient,
        unit_of_work_factory: Callable[[], TrackerUnitOfWork],
    ) -> None:
        self._client = client
        self._unit_of_work_factory = unit_of_work_factory

    async def run(self) -> ReconcileResult:
        result = ReconcileResult()
        for kind in REFERENCE_ORDER:
            remote_items = await self._fetch_references(kind)()
            self._merge_references(kind, remote_items, result.counts(kind))

        remote_interviews = await self._client.fetch_interviews(InterviewQuery(include_past=True))
        self._merge_interviews(remote_interviews, result)

        log.info(
            "Reconciled %s interviews (%s new, %s skipped)",
            len(remote_interviews),
            result.interviews.inserted,
            result.skipped_interviews,
        )
        return result

    def _fetch_references(
        self, kind: ReferenceKind
    ) -> Callable[[], Awaitable[Sequence[RemoteReference]]]:
        if kind is ReferenceKind.COMPANY:
            return self._client.fetch_companies
        if kind is ReferenceKind.STAGE:
            return self._client.fetch_stages
        return self._client.fetch_stage_methods

    def _merge_references(
        self,
        kind: ReferenceKind,
        remote_items: Sequence[RemoteReference],
        counts: MergeCounts,
    ) -> None:
        with self._unit_of_work_factory() as uow:
            repository = uow.repositories.references(kind)
            for item in remote_items:
                if not item.name.strip():
                    log.warning("Ignoring %s %s with an empty name", kind, item.remote_id)
                    continue
                existing = repository.get_by_remote_id(item.remote_id)
                if existing is None:
                    entity_cls = REFERENCE_CLASS_BY_KIND[kind]
                    repository.add(entity_cls(remote_id=item.remote_id, name=item.name))
                    counts.inserted += 1
                elif existing.name != item.name:
                    existing.name = item.name
                    counts.updated += 1
            uow.commit()
        log.debug("Merged %s %s rows: %s", len(remote_items), kind, counts)

    def _merge_interviews(
        self,
        remote_interviews: Sequence[RemoteInterview],
        result: ReconcileResult,
    ) -> None:
        with self._unit_of_work_factory() as uow:
            repositories = uow.repositories
            for remote in remote_interviews:
                company = repositories.companies.get_by_remote_id(remote.company.remote_id)
                if company is None:
                    log.debug(
                        "Skipping interview %s: company %s is not known locally",
                        remote.remote_id,
                        remote.company.remote_id,
                    )
                    result.skipped_interviews += 1
                    continue
                stage = (
                    repositories.stages.get_by_remote_id(remote.stage.remote_id)
                    if remote.stage is not None
                    else None
                )
                method = (
                    repositories.stage_methods.get_by_remote_id(remote.stage_method.remote_id)
                    if remote.stage_method is not None
                    else None
                )

                interview = repositories.interviews.get_by_remote_id(remote.remote_id)
                if interview is None:
                    interview = Interview(
                        remote_id=remote.remote_id,
                        company=company,
                        job_title=remote.job_title,
                        application_date=parse_datetime(remote.application_date) or utcnow(),
                    )
                    _apply_remote(interview, remote, company, stage, method)
                    repositories.interviews.add(interview)
                    result.interviews.inserted += 1
                    continue

                before = _snapshot(interview)
                _apply_remote(interview, remote, company, stage, method)
                if _snapshot(interview) != before:
                    interview.touch()
                    result.interviews.updated += 1
            uow.commit()


def _apply_remote(
    interview: Interview,
    remote: RemoteInterview,
    company: Company,
    stage: Stage | None,
    method: StageMethod | None,
) -> None:
    interview.company = company
    interview.stage = stage
    interview.stage_method = method
    interview.job_title = remote.job_title
    interview.application_date = (
        parse_datetime(remote.application_date) or interview.application_date
    )
    interview.client_company = remote.client_company
    interview.interviewer = remote.interviewer
    interview.date = parse_datetime(remote.date)
    interview.deadline = parse_datetime(remote.deadline)
    interview.outcome = parse_outcome(remote.outcome)
    interview.notes = remote.notes
    interview.link = remote.link
    if remote.metadata is not None:
        interview.meta = InterviewMetadata(
            job_listing=remote.metadata.job_listing,
            location=remote.metadata.location,
            extra=dict(interview.meta.extra),
        )
        interview.job_posting_link = remote.metadata.job_listing


def _snapshot(interview: Interview) -> tuple[object, ...]:
    references: tuple[ReferenceEntity | None, ...] = tuple(
        interview.reference(kind) for kind in REFERENCE_ORDER
    )
    return (
        *references,
        interview.job_title,
        interview.application_date,
        interview.client_company,
        interview.interviewer,
        interview.date,
        interview.deadline,
        interview.outcome,
        interview.notes,
        interview.link,
        interview.job_posting_link,
        interview.meta.to_mapping(),
    )
