"""Orchestration of the sync passes and their critical-section flags.

All passes run on one asyncio event loop. ``is_syncing`` and ``is_migrating``
are checked and set with no ``await`` in between, so a second pass requested
while one is in flight fails with ``SyncInProgressError`` instead of
interleaving its writes.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from interviewdesk.domain.errors import (
    NotAuthenticatedError,
    PartialMigrationFailure,
    SyncError,
    SyncInProgressError,
)
from interviewdesk.domain.interviews import (
    InterviewNotFoundError,
    add_interview,
    advance_to_next_stage,
)
from interviewdesk.domain.model import utcnow
from interviewdesk.domain.reconciliation.deduplicate import DeduplicationResult, Deduplicator
from interviewdesk.domain.reconciliation.migrate import (
    MigrationResult,
    Migrator,
    bind_created,
    send_outcome,
)
from interviewdesk.domain.reconciliation.payloads import create_payload, update_payload
from interviewdesk.domain.reconciliation.reconcile import Reconciler, ReconcileResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator
    from datetime import datetime

    from interviewdesk.domain.interviews import InterviewDraft, NextStage
    from interviewdesk.domain.model import Interview
    from interviewdesk.domain.ports.remote import RemoteClient, RemoteInterview
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)


class SyncCoordinator:
    """Entry point the presentation layer calls for every sync-related action."""

    def __init__(
        self,
        *,
        client: RemoteClient,
        unit_of_work_factory: Callable[[], TrackerUnitOfWork],
    ) -> None:
        self._client = client
        self._unit_of_work_factory = unit_of_work_factory
        self._reconciler = Reconciler(client=client, unit_of_work_factory=unit_of_work_factory)
        self._migrator = Migrator(client=client, unit_of_work_factory=unit_of_work_factory)
        self._deduplicator = Deduplicator(unit_of_work_factory=unit_of_work_factory)
        self._syncing = False
        self._pushing = False
        self.last_sync_date: datetime | None = None
        self.sync_error: BaseException | None = None

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    @property
    def is_migrating(self) -> bool:
        return self._migrator.in_progress

    @property
    def is_authenticated(self) -> bool:
        return self._client.is_authenticated

    @property
    def is_busy(self) -> bool:
        return self._syncing or self._pushing or self._migrator.in_progress

    # Session ----------------------------------------------------------------

    async def perform_sign_in(self, token: str) -> None:
        """Apply ``token`` then migrate guest data, reconcile and deduplicate, in that order.

        A partial migration keeps its successes and does not stop the remaining
        steps; it is re-raised once they have run. Any other error aborts.
        """

        with self._exclusive("sign-in"):
            self._client.set_auth_token(token)
            partial: PartialMigrationFailure | None = None
            try:
                await self._migrator.run()
            except PartialMigrationFailure as exc:
                log.warning("Continuing sign-in after partial migration: %s", exc)
                partial = exc
            try:
                await self._reconciler.run()
                self._deduplicator.run()
            except SyncError as exc:
                if partial is None:
                    raise
                raise exc from partial
            if partial is not None:
                raise partial

    def sign_out(self) -> None:
        """Forget the token; local data stays as it is."""

        self._client.set_auth_token(None)
        self.last_sync_date = None
        self.sync_error = None

    # Passes -----------------------------------------------------------------

    async def sync_all(self) -> ReconcileResult:
        """Pull the server's catalog into the local store."""

        self._require_authentication()
        with self._exclusive("sync"):
            return await self._reconciler.run()

    async def refresh(self) -> tuple[ReconcileResult, DeduplicationResult]:
        """Manual refresh: reconcile then deduplicate, without migrating."""

        self._require_authentication()
        with self._exclusive("refresh"):
            reconciled = await self._reconciler.run()
            return reconciled, self._deduplicator.run()

    async def migrate_guest_data_to_server(self) -> MigrationResult:
        if self._syncing or self._pushing:
            raise SyncInProgressError("Cannot migrate while a sync is running")
        return await self._tracked(self._migrator.run)

    async def cleanup_all(self) -> DeduplicationResult:
        with self._exclusive("cleanup"):
            return self._deduplicator.run()

    async def push_interview(self, interview_id: int) -> RemoteInterview:
        """Create a guest-local interview remotely, or send the edits of a synced one.

        Rejected with ``SyncInProgressError`` while any pass or another push is
        running, so a guest interview is never created twice.
        """

        self._require_authentication()
        # checked and set before the first await
        if self.is_busy:
            raise SyncInProgressError(
                f"Cannot push interview {interview_id}: another sync pass is running"
            )
        self._pushing = True
        try:
            return await self._push(interview_id)
        finally:
            self._pushing = False

    async def _push(self, interview_id: int) -> RemoteInterview:
        with self._unit_of_work_factory() as uow:
            interview = uow.repositories.interviews.get(interview_id)
            if interview is None:
                raise InterviewNotFoundError(interview_id)
            if interview.remote_id is None:
                created = await self._client.create_interview(create_payload(interview))
                bind_created(interview, created)
                uow.commit()
                log.info("Pushed interview %s as remote %s", interview_id, created.remote_id)
                pushed = await send_outcome(self._client, interview, created)
            else:
                pushed = await self._client.update_interview(
                    interview.remote_id, update_payload(interview)
                )
                log.info("Updated remote interview %s", interview.remote_id)
        return pushed

    # Local mutations ----------------------------------------------------------

    async def create_interview(self, draft: InterviewDraft) -> Interview:
        """Store the draft locally, then try to push it right away."""

        with self._unit_of_work_factory() as uow:
            interview = add_interview(uow, draft)
        await self._push_opportunistically(interview)
        return interview

    async def advance_interview(self, interview_id: int, next_stage: NextStage) -> Interview:
        with self._unit_of_work_factory() as uow:
            interview = advance_to_next_stage(uow, interview_id, next_stage)
            previous = uow.repositories.interviews.get(interview_id)
            previous_synced = previous is not None and previous.remote_id is not None
        if previous_synced:
            await self._push_opportunistically_by_id(interview_id)
        await self._push_opportunistically(interview)
        return interview

    async def _push_opportunistically(self, interview: Interview) -> None:
        if interview.id is None:
            return
        await self._push_opportunistically_by_id(interview.id)

    async def _push_opportunistically_by_id(self, interview_id: int) -> None:
        if not self._client.is_authenticated:
            return
        if self.is_busy:
            log.debug("Sync running; interview %s waits for the next migration", interview_id)
            return
        try:
            await self.push_interview(interview_id)
        except SyncError as exc:
            log.warning("Could not push interview %s, keeping it local: %s", interview_id, exc)

    # Helpers ----------------------------------------------------------------

    def _require_authentication(self) -> None:
        if not self._client.is_authenticated:
            raise NotAuthenticatedError

    @contextmanager
    def _exclusive(self, name: str) -> Iterator[None]:
        if self.is_busy:
            raise SyncInProgressError(f"Cannot start {name}: another sync pass is running")
        self._syncing = True
        log.info("Starting %s", name)
        try:
            yield
        except BaseException as exc:
            self.sync_error = exc
            raise
        else:
            self.last_sync_date = utcnow()
            self.sync_error = None
        finally:
            self._syncing = False

    async def _tracked[T](self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            result = await operation()
        except BaseException as exc:
            self.sync_error = exc
            raise
        self.sync_error = None
        return result
