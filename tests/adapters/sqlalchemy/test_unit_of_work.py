from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from interviewdesk.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyTrackerUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
    store_changes,
)
from interviewdesk.domain.model import Company, Stage
from tests.helpers.tracker import make_interview

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

    from interviewdesk.domain.changes import StoreChanges


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    assert is_started() is False
    with pytest.raises(StartupError):
        SqlAlchemyTrackerUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_unit_of_work_persists_across_sessions(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyTrackerUnitOfWork() as uow:
        interview = make_interview(Company(name="Acme"), stage=Stage(name="Applied"))
        uow.repositories.interviews.add(interview)
        uow.commit()
        interview_id = interview.id

    assert interview_id is not None
    with SqlAlchemyTrackerUnitOfWork() as uow:
        loaded = uow.repositories.interviews.get(interview_id)
        assert loaded is not None
        assert loaded.company.name == "Acme"
        assert loaded.stage is not None
        assert loaded.stage.name == "Applied"
        assert uow.repositories.companies.count() == 1


def test_exception_rolls_back_pending_changes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyTrackerUnitOfWork() as uow:
        uow.repositories.stages.add(Stage(name="Phone Screen"))
        raise RuntimeError("boom")

    with SqlAlchemyTrackerUnitOfWork() as uow:
        assert uow.repositories.stages.count() == 0


def test_commit_notifies_change_subscribers(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    seen: list[int] = []

    def listener(changes: StoreChanges) -> None:
        seen.append(changes.version)

    unsubscribe = store_changes().subscribe(listener)
    with SqlAlchemyTrackerUnitOfWork() as uow:
        uow.repositories.stages.add(Stage(name="Applied"))
        uow.commit()
        unsubscribe()
        uow.repositories.stages.add(Stage(name="Final Stage"))
        uow.commit()

    assert seen == [1]
    assert store_changes().version == 2
    assert store_changes().last_modified is not None
