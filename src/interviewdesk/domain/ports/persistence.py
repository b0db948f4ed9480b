"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

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


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...

    def remove(self, entity: TEntity) -> None: ...

    def list_all(self) -> Sequence[TEntity]: ...

    def find(self, predicate: Callable[[TEntity], bool]) -> Sequence[TEntity]: ...

    def get_by_remote_id(self, remote_id: int) -> TEntity | None: ...

    def count(self) -> int: ...


@runtime_checkable
class ReferenceRepository[TReference: ReferenceEntity](Repository[TReference], Protocol):
    """Repository contract for named reference rows.

    ``list_all`` yields rows with a remote identity first (ascending), then
    guest-local rows in insertion order.
    """

    def find_by_name(self, name: str) -> Sequence[TReference]: ...


@runtime_checkable
class CompanyRepository(ReferenceRepository[Company], Protocol):
    """Repository contract for companies."""


@runtime_checkable
class StageRepository(ReferenceRepository[Stage], Protocol):
    """Repository contract for stages."""


@runtime_checkable
class StageMethodRepository(ReferenceRepository[StageMethod], Protocol):
    """Repository contract for stage methods."""


@runtime_checkable
class InterviewRepository(Repository[Interview], Protocol):
    """Repository contract for interviews."""

    def get(self, interview_id: int) -> Interview | None: ...

    def list_guest_local(self) -> Sequence[Interview]: ...

    def referencing(self, kind: ReferenceKind, entity: ReferenceEntity) -> Sequence[Interview]: ...
