"""SQLAlchemy mapping metadata for the interviewdesk domain model."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from interviewdesk.domain.model import (
    Company,
    Interview,
    InterviewMetadata,
    InterviewOutcome,
    Stage,
    StageMethod,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class InterviewMetadataType(TypeDecorator[InterviewMetadata]):
    """JSON document column; unknown keys survive a load/store cycle."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: InterviewMetadata | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None or value.is_empty():
            return None
        return json.dumps(value.to_mapping(), sort_keys=True)

    def process_result_value(self, value: str | None, dialect: Dialect) -> InterviewMetadata:
        _ = dialect
        if value is None:
            return InterviewMetadata()
        try:
            loaded = json.loads(value)
        except json.JSONDecodeError:
            log.warning("Discarding unreadable interview metadata: %r", value)
            return InterviewMetadata()
        if not isinstance(loaded, dict):
            return InterviewMetadata()
        return InterviewMetadata.from_mapping(cast(dict[str, Any], loaded))


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Reference tables ------------------------------------------------------------

company_table = Table(
    "company",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("remote_id", Integer, nullable=True, index=True),
    Column("name", String, nullable=False),
    Column("user_id", Integer, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
)

stage_table = Table(
    "stage",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("remote_id", Integer, nullable=True, index=True),
    Column("name", String, nullable=False),
)

stage_method_table = Table(
    "stage_method",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("remote_id", Integer, nullable=True, index=True),
    Column("name", String, nullable=False),
)

# Interviews ------------------------------------------------------------------

interview_table = Table(
    "interview",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("remote_id", Integer, nullable=True, index=True),
    Column(
        "company_id",
        Integer,
        ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "stage_id",
        Integer,
        ForeignKey("stage.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column(
        "stage_method_id",
        Integer,
        ForeignKey("stage_method.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    Column("job_title", String, nullable=False),
    Column("application_date", UTCDateTime(), nullable=False),
    Column("client_company", String, nullable=True),
    Column("interviewer", String, nullable=True),
    Column("user_id", Integer, nullable=True),
    Column("date", UTCDateTime(), nullable=True),
    Column("deadline", UTCDateTime(), nullable=True),
    Column("outcome", Enum(InterviewOutcome, native_enum=False, length=32), nullable=True),
    Column("notes", Text, nullable=True),
    Column("link", String, nullable=True),
    Column("job_posting_link", String, nullable=True),
    Column("metadata", InterviewMetadataType(), key="meta", nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model.

    Company -> Interview cascades deletes; Stage/StageMethod -> Interview
    nullifies the reference when the parent row is deleted.
    """

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Company,
        company_table,
        properties={
            "interviews": relationship(
                Interview,
                back_populates="company",
                cascade="all, delete-orphan",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Stage,
        stage_table,
        properties={
            "interviews": relationship(Interview, back_populates="stage"),
        },
    )

    mapper_registry.map_imperatively(
        StageMethod,
        stage_method_table,
        properties={
            "interviews": relationship(Interview, back_populates="stage_method"),
        },
    )

    mapper_registry.map_imperatively(
        Interview,
        interview_table,
        properties={
            "company": relationship(Company, back_populates="interviews"),
            "stage": relationship(Stage, back_populates="interviews"),
            "stage_method": relationship(StageMethod, back_populates="interviews"),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
