"""SQLAlchemy-backed unit of work for the local interview store.

The adapter keeps one engine per process. ``startup()`` creates it, maps the
domain classes and migrates the schema; every unit of work then opens its own
session from the shared factory.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from interviewdesk.adapters.sqlalchemy.mappings import start_mappers
from interviewdesk.adapters.sqlalchemy.migrations import upgrade_head
from interviewdesk.adapters.sqlalchemy.repositories import (
    SqlAlchemyCompanyRepository,
    SqlAlchemyInterviewRepository,
    SqlAlchemyStageMethodRepository,
    SqlAlchemyStageRepository,
)
from interviewdesk.config import get_database_config
from interviewdesk.domain.changes import StoreChanges
from interviewdesk.domain.ports.unit_of_work import RepositoryCollection, TrackerRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """The local store was used before ``startup()`` or outside a ``with`` block."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None
    changes: StoreChanges = field(default_factory=StoreChanges)


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) and migrate it.

    Without ``force`` a second call raises, so tests and entry points cannot
    silently swap the database under open units of work.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Local store already started. Pass force=True to reconfigure.")

    if engine is None:
        engine = create_engine(database_uri or get_database_config().uri, future=True)
    start_mappers()
    upgrade_head(engine=engine)

    _STATE.engine = engine
    _STATE.sessions = sessionmaker(bind=engine, expire_on_commit=False)
    _STATE.changes = StoreChanges()
    log.debug("Local store ready at %s", engine.url)


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def store_changes() -> StoreChanges:
    """Commit counter that observers can poll or subscribe to."""

    return _STATE.changes


def shutdown() -> None:
    """Dispose the engine and forget it; ``startup()`` may be called again afterwards."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.sessions = None


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """One session per ``with`` block; leaving the block on an error rolls back."""

    def __init__(self) -> None:
        if _STATE.sessions is None:
            raise StartupError(
                "Local store not started. Call "
                "interviewdesk.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        self._sessions = _STATE.sessions
        self._changes = _STATE.changes
        self._session: Session | None = None
        self._repositories: TRepositories | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._sessions()
        self._repositories = self._build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session

    @property
    def repositories(self) -> TRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with block")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()
        self._changes.record_commit()

    def rollback(self) -> None:
        self.session.rollback()


class SqlAlchemyTrackerUnitOfWork(BaseSqlAlchemyUnitOfWork[TrackerRepositories]):
    """Unit of work over companies, stages, stage methods and interviews."""

    def _build_repositories(self, session: Session) -> TrackerRepositories:
        return TrackerRepositories(
            companies=SqlAlchemyCompanyRepository(session),
            stages=SqlAlchemyStageRepository(session),
            stage_methods=SqlAlchemyStageMethodRepository(session),
            interviews=SqlAlchemyInterviewRepository(session),
        )


if TYPE_CHECKING:
    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

    _uow_check: TrackerUnitOfWork = SqlAlchemyTrackerUnitOfWork()
