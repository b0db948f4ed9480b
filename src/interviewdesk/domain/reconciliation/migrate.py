"""Push guest-local interviews to the server once the user is signed in."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from interviewdesk.domain.errors import (
    NotAuthenticatedError,
    PartialMigrationFailure,
    SyncError,
    SyncInProgressError,
)
from interviewdesk.domain.reconciliation.payloads import create_payload, update_payload

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from interviewdesk.domain.model import Company, Interview
    from interviewdesk.domain.ports.remote import RemoteClient, RemoteInterview, RemoteReference
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)


@dataclass(slots=True)
class MigrationResult:
    succeeded: int = 0
    failed: int = 0
    companies_bound: int = 0
    errors: list[SyncError] = field(default_factory=list[SyncError])

    @property
    def attempted(self) -> int:
        return self.succeeded + self.failed


class Migrator:
    """Give every guest-local interview a remote identity.

    Per-record push failures are collected rather than raised; successes are
    committed together and a ``PartialMigrationFailure`` is raised afterwards
    when anything failed.
    """

    def __init__(
        self,
        *,
        client: RemoteClient,
        unit_of_work_factory: Callable[[], TrackerUnitOfWork],
    ) -> None:
        self._client = client
        self._unit_of_work_factory = unit_of_work_factory
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    async def run(self) -> MigrationResult:
        if not self._client.is_authenticated:
            raise NotAuthenticatedError
        # checked and set before the first await
        if self._in_progress:
            raise SyncInProgressError("A migration is already running")
        self._in_progress = True
        try:
            result = await self._migrate()
        finally:
            self._in_progress = False

        if result.failed:
            raise PartialMigrationFailure(result.succeeded, result.failed, errors=result.errors)
        return result

    async def _migrate(self) -> MigrationResult:
        result = MigrationResult()
        with self._unit_of_work_factory() as uow:
            guests = list(uow.repositories.interviews.list_guest_local())
            if not guests:
                log.debug("No guest interviews to migrate")
                return result

            log.info("Migrating %s guest interviews", len(guests))
            result.companies_bound = await self._bind_known_companies(guests)

            for interview in guests:
                try:
                    created = await self._client.create_interview(create_payload(interview))
                except SyncError as exc:
                    log.warning(
                        "Could not push interview %s (%s at %s): %s",
                        interview.id,
                        interview.job_title,
                        interview.company.name,
                        exc,
                    )
                    result.failed += 1
                    result.errors.append(exc)
                    continue
                bind_created(interview, created)
                try:
                    await send_outcome(self._client, interview, created)
                except SyncError as exc:
                    log.warning(
                        "Interview %s was created as remote %s but its outcome was not sent: %s",
                        interview.id,
                        created.remote_id,
                        exc,
                    )
                    result.failed += 1
                    result.errors.append(exc)
                    continue
                result.succeeded += 1

            uow.commit()

        log.info(
            "Migration finished: %s succeeded, %s failed", result.succeeded, result.failed
        )
        return result

    async def _bind_known_companies(self, guests: Sequence[Interview]) -> int:
        unresolved: dict[str, list[Company]] = {}
        for interview in guests:
            company = interview.company
            if company.remote_id is None:
                members = unresolved.setdefault(company.name, [])
                if company not in members:
                    members.append(company)
        if not unresolved:
            return 0

        try:
            remote_companies = await self._client.fetch_companies()
        except SyncError as exc:
            log.warning("Could not look up remote companies, pushing unbound: %s", exc)
            return 0

        remote_by_name = _first_by_name(remote_companies)
        bound = 0
        for name, companies in unresolved.items():
            remote = remote_by_name.get(name)
            if remote is None:
                continue
            for company in companies:
                company.remote_id = remote.remote_id
                bound += 1
        return bound


def _first_by_name(items: Sequence[RemoteReference]) -> dict[str, RemoteReference]:
    by_name: dict[str, RemoteReference] = {}
    for item in items:
        by_name.setdefault(item.name, item)
    return by_name


def bind_created(interview: Interview, created: RemoteInterview) -> None:
    """Record the identities the server assigned to a freshly pushed interview."""

    interview.remote_id = created.remote_id
    if interview.company.remote_id is None:
        interview.company.remote_id = created.company.remote_id
    interview.touch()


async def send_outcome(
    client: RemoteClient,
    interview: Interview,
    created: RemoteInterview,
) -> RemoteInterview:
    """Follow a create with an update when the local outcome differs from the server's.

    The creation payload has no outcome field.
    """

    if interview.outcome is None or created.outcome == interview.outcome.value:
        return created
    return await client.update_interview(created.remote_id, update_payload(interview))
