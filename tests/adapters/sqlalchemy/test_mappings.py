from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy import inspect, select, text

from interviewdesk.adapters.sqlalchemy import start_mappers
from interviewdesk.domain.model import (
    Company,
    Interview,
    InterviewMetadata,
    InterviewOutcome,
)
from tests.helpers.tracker import make_interview

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_migrations_create_tracker_tables(sqlite_engine: Engine) -> None:
    table_names = set(inspect(sqlite_engine).get_table_names())

    assert {"company", "stage", "stage_method", "interview", "alembic_version"} <= table_names


def test_interview_round_trip_keeps_outcome_dates_and_metadata(sqlite_session: Session) -> None:
    scheduled = datetime(2025, 3, 10, 16, 30, tzinfo=timezone(timedelta(hours=2)))
    interview = make_interview(
        Company(name="Acme"),
        date=scheduled,
        outcome=InterviewOutcome.AWAITING_RESPONSE,
        meta=InterviewMetadata(
            job_listing="https://jobs.example/1",
            location="Berlin",
            extra={"methodType": "Video Call"},
        ),
    )
    sqlite_session.add(interview)
    sqlite_session.commit()
    sqlite_session.expire_all()

    loaded = sqlite_session.execute(select(Interview)).scalar_one()

    assert loaded.outcome is InterviewOutcome.AWAITING_RESPONSE
    assert loaded.date == scheduled
    assert loaded.date is not None
    assert loaded.date.tzinfo is not None
    assert loaded.meta == InterviewMetadata(
        job_listing="https://jobs.example/1",
        location="Berlin",
        extra={"methodType": "Video Call"},
    )


def test_unreadable_metadata_loads_as_empty(sqlite_session: Session) -> None:
    interview = make_interview(Company(name="Acme"))
    sqlite_session.add(interview)
    sqlite_session.commit()
    sqlite_session.execute(text("UPDATE interview SET metadata = '{broken'"))
    sqlite_session.commit()
    sqlite_session.expire_all()

    loaded = sqlite_session.execute(select(Interview)).scalar_one()

    assert loaded.meta.is_empty()
    assert loaded.display_date is None
    assert loaded.application_date.tzinfo is UTC
