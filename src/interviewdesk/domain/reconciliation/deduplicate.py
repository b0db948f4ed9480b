"""Collapse reference rows that share a display name.

Names match exactly, so "Phone Screen" and "phone screen" stay distinct. The
survivor is the first member with a remote identity, otherwise the first
member; members are ordered by remote identity (absent last) and then by local
id. Interviews pointing at a duplicate are repointed at the survivor before the
duplicate is deleted, which keeps company deletes from cascading into them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from interviewdesk.domain.errors import DeduplicationError
from interviewdesk.domain.model import ReferenceEntity, ReferenceKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)

DEDUPLICATION_ORDER: tuple[ReferenceKind, ...] = (
    ReferenceKind.STAGE,
    ReferenceKind.STAGE_METHOD,
    ReferenceKind.COMPANY,
)


@dataclass(slots=True)
class DeduplicationResult:
    removed: dict[ReferenceKind, int] = field(default_factory=dict[ReferenceKind, int])
    reassigned: dict[ReferenceKind, int] = field(default_factory=dict[ReferenceKind, int])

    @property
    def total_removed(self) -> int:
        return sum(self.removed.values())


def encounter_key(entity: ReferenceEntity) -> tuple[bool, int, int]:
    return (
        entity.remote_id is None,
        entity.remote_id if entity.remote_id is not None else 0,
        entity.id if entity.id is not None else 0,
    )


def choose_survivor[TReference: ReferenceEntity](members: Iterable[TReference]) -> TReference:
    ordered = sorted(members, key=encounter_key)
    for member in ordered:
        if member.remote_id is not None:
            return member
    return ordered[0]


class Deduplicator:
    def __init__(self, *, unit_of_work_factory: Callable[[], TrackerUnitOfWork]) -> None:
        self._unit_of_work_factory = unit_of_work_factory

    def run(self) -> DeduplicationResult:
        """Deduplicate every kind; failed kinds are reported together at the end."""

        result = DeduplicationResult()
        failures: dict[ReferenceKind, BaseException] = {}
        for kind in DEDUPLICATION_ORDER:
            try:
                self._deduplicate_kind(kind, result)
            except Exception as exc:  # noqa: BLE001
                log.exception("Deduplication of %s rows failed", kind)
                failures[kind] = exc

        if failures:
            raise DeduplicationError(failures)
        if result.total_removed:
            log.info("Removed %s duplicate reference rows", result.total_removed)
        return result

    def _deduplicate_kind(self, kind: ReferenceKind, result: DeduplicationResult) -> None:
        removed = 0
        reassigned = 0
        with self._unit_of_work_factory() as uow:
            references = uow.repositories.references(kind)
            interviews = uow.repositories.interviews

            groups: dict[str, list[ReferenceEntity]] = {}
            for entity in references.list_all():
                groups.setdefault(entity.name, []).append(entity)

            for name, members in groups.items():
                if len(members) < 2:
                    continue
                survivor = choose_survivor(members)
                for duplicate in members:
                    if duplicate is survivor:
                        continue
                    for interview in interviews.referencing(kind, duplicate):
                        interview.set_reference(kind, survivor)
                        interview.touch()
                        reassigned += 1
                    references.remove(duplicate)
                    removed += 1
                log.debug("Kept %s %r (remote id %s)", kind, name, survivor.remote_id)

            uow.commit()

        result.removed[kind] = removed
        result.reassigned[kind] = reassigned
