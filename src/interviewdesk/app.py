"""Application orchestration entry points.

Each function wires the configured adapters and runs one use case; async
passes are driven with ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from interviewdesk.adapters.api import build_interviews_api_client
from interviewdesk.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTrackerUnitOfWork,
    is_started,
    startup,
)
from interviewdesk.domain.reconciliation import SyncCoordinator
from interviewdesk.domain.seeding import SeedResult, seed_defaults
from interviewdesk.domain.stats import InterviewStats

if TYPE_CHECKING:
    from interviewdesk.domain.interviews import InterviewDraft, NextStage
    from interviewdesk.domain.model import Interview
    from interviewdesk.domain.ports.remote import RemoteClient, RemoteInterview
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork
    from interviewdesk.domain.reconciliation import (
        DeduplicationResult,
        MigrationResult,
        ReconcileResult,
    )

type UnitOfWorkFactory = Callable[[], TrackerUnitOfWork]

log = getLogger(__name__)


def _ensure_started() -> None:
    if not is_started():
        startup()


def build_coordinator(
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncCoordinator:
    """Coordinator over the configured API client and local store."""

    if unit_of_work_factory is None:
        _ensure_started()
    return SyncCoordinator(
        client=client or build_interviews_api_client(),
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyTrackerUnitOfWork,
    )


def seed_local_store(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> SeedResult:
    if unit_of_work_factory is None:
        _ensure_started()
    return seed_defaults(unit_of_work_factory=unit_of_work_factory or SqlAlchemyTrackerUnitOfWork)


def sync_remote(
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    deduplicate: bool = True,
) -> ReconcileResult:
    """Pull the server's data; with ``deduplicate`` this is the manual refresh."""

    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    if not deduplicate:
        return asyncio.run(coordinator.sync_all())
    reconciled, deduplicated = asyncio.run(coordinator.refresh())
    log.info(
        "Finished refresh: %s new interviews, %s duplicates removed",
        reconciled.interviews.inserted,
        deduplicated.total_removed,
    )
    return reconciled


def sign_in(
    token: str,
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    """Migrate guest data, reconcile and deduplicate under ``token``."""

    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    asyncio.run(coordinator.perform_sign_in(token))


def migrate_guest_data(
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> MigrationResult:
    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    return asyncio.run(coordinator.migrate_guest_data_to_server())


def cleanup_local_store(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    client: RemoteClient | None = None,
) -> DeduplicationResult:
    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    return asyncio.run(coordinator.cleanup_all())


def push_local_interview(
    interview_id: int,
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> RemoteInterview:
    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    return asyncio.run(coordinator.push_interview(interview_id))


def add_local_interview(
    draft: InterviewDraft,
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Interview:
    """Store a new interview and push it when signed in."""

    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    return asyncio.run(coordinator.create_interview(draft))


def advance_local_interview(
    interview_id: int,
    next_stage: NextStage,
    *,
    client: RemoteClient | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Interview:
    coordinator = build_coordinator(client=client, unit_of_work_factory=unit_of_work_factory)
    return asyncio.run(coordinator.advance_interview(interview_id, next_stage))


def compute_stats(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> InterviewStats:
    if unit_of_work_factory is None:
        _ensure_started()
    with (unit_of_work_factory or SqlAlchemyTrackerUnitOfWork)() as uow:
        return InterviewStats.compute(uow.repositories.interviews.list_all())
