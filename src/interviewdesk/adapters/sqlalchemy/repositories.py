"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from interviewdesk.adapters.sqlalchemy.mappings import (
    company_table,
    interview_table,
    stage_method_table,
    stage_table,
)
from interviewdesk.domain.model import (
    Company,
    Interview,
    ReferenceEntity,
    ReferenceKind,
    Stage,
    StageMethod,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import Table
    from sqlalchemy.orm import Session

_FOREIGN_KEY_BY_KIND: dict[ReferenceKind, str] = {
    ReferenceKind.COMPANY: "company_id",
    ReferenceKind.STAGE: "stage_id",
    ReferenceKind.STAGE_METHOD: "stage_method_id",
}


class SqlAlchemyRepository[TEntity: Any]:
    """Shared helpers for repositories keyed by a local surrogate and a remote identity."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def remove(self, entity: TEntity) -> None:
        # reassignments made earlier in the session must hit the database
        # before the delete cascade loads related collections
        self.session.flush()
        self.session.delete(entity)

    def list_all(self) -> list[TEntity]:
        stmt = select(self._entity_cls).order_by(
            self._table.c.remote_id.is_(None),
            self._table.c.remote_id,
            self._table.c.id,
        )
        return list(self.session.execute(stmt).scalars().all())

    def find(self, predicate: Callable[[TEntity], bool]) -> list[TEntity]:
        return [entity for entity in self.list_all() if predicate(entity)]

    def get_by_remote_id(self, remote_id: int) -> TEntity | None:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.remote_id == remote_id)
            .order_by(self._table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return int(self.session.execute(stmt).scalar_one())


class SqlAlchemyReferenceRepository[TReference: ReferenceEntity](
    SqlAlchemyRepository[TReference]
):
    def find_by_name(self, name: str) -> list[TReference]:
        stmt = (
            select(self._entity_cls)
            .where(self._table.c.name == name)
            .order_by(
                self._table.c.remote_id.is_(None),
                self._table.c.remote_id,
                self._table.c.id,
            )
        )
        return list(self.session.execute(stmt).scalars().all())


class SqlAlchemyCompanyRepository(SqlAlchemyReferenceRepository[Company]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Company, company_table)


class SqlAlchemyStageRepository(SqlAlchemyReferenceRepository[Stage]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Stage, stage_table)


class SqlAlchemyStageMethodRepository(SqlAlchemyReferenceRepository[StageMethod]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, StageMethod, stage_method_table)


class SqlAlchemyInterviewRepository(SqlAlchemyRepository[Interview]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Interview, interview_table)

    def get(self, interview_id: int) -> Interview | None:
        return self.session.get(Interview, interview_id)

    def list_guest_local(self) -> list[Interview]:
        stmt = (
            select(Interview)
            .where(interview_table.c.remote_id.is_(None))
            .order_by(interview_table.c.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def referencing(self, kind: ReferenceKind, entity: ReferenceEntity) -> list[Interview]:
        if entity.id is None:
            return []
        column = interview_table.c[_FOREIGN_KEY_BY_KIND[kind]]
        stmt = select(Interview).where(column == entity.id).order_by(interview_table.c.id)
        return list(self.session.execute(stmt).scalars().all())


if TYPE_CHECKING:
    from interviewdesk.domain.ports.persistence import (
        CompanyRepository,
        InterviewRepository,
        StageMethodRepository,
        StageRepository,
    )

    _company_repo_check: type[CompanyRepository] = SqlAlchemyCompanyRepository
    _stage_repo_check: type[StageRepository] = SqlAlchemyStageRepository
    _method_repo_check: type[StageMethodRepository] = SqlAlchemyStageMethodRepository
    _interview_repo_check: type[InterviewRepository] = SqlAlchemyInterviewRepository
