"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from interviewdesk.domain.model import ReferenceKind

if TYPE_CHECKING:
    from types import TracebackType

    from interviewdesk.domain.model import ReferenceEntity
    from interviewdesk.domain.ports.persistence import (
        CompanyRepository,
        InterviewRepository,
        ReferenceRepository,
        StageMethodRepository,
        StageRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class TrackerRepositories(RepositoryCollection):
    """Repositories for the four entity kinds of the local store."""

    companies: CompanyRepository
    stages: StageRepository
    stage_methods: StageMethodRepository
    interviews: InterviewRepository

    def references(self, kind: ReferenceKind) -> ReferenceRepository[ReferenceEntity]:
        if kind is ReferenceKind.COMPANY:
            return self.companies  # pyright: ignore[reportReturnType]
        if kind is ReferenceKind.STAGE:
            return self.stages  # pyright: ignore[reportReturnType]
        return self.stage_methods  # pyright: ignore[reportReturnType]


type TrackerUnitOfWork = UnitOfWork[TrackerRepositories]
