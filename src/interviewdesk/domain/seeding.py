"""Default stages and stage methods for an empty store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from interviewdesk.domain.model import Stage, StageMethod

if TYPE_CHECKING:
    from collections.abc import Callable

    from interviewdesk.domain.ports.unit_of_work import TrackerUnitOfWork

log = logging.getLogger(__name__)

DEFAULT_STAGES: Final[tuple[str, ...]] = (
    "Applied",
    "Phone Screen",
    "First Stage",
    "Second Stage",
    "Technical Test",
    "Technical Interview",
    "Third Stage",
    "Fourth Stage",
    "Final Stage",
)

DEFAULT_STAGE_METHODS: Final[tuple[str, ...]] = (
    "Video Call",
    "Phone",
    "In Person",
    "Take Home Test",
    "Live Coding",
)


@dataclass(slots=True, frozen=True)
class SeedResult:
    stages_added: int
    stage_methods_added: int


def seed_defaults(*, unit_of_work_factory: Callable[[], TrackerUnitOfWork]) -> SeedResult:
    """Insert the default rows of each kind that has no rows at all.

    Safe to call on every startup: a kind with any existing row, synced or
    guest-local, is left alone.
    """

    stages_added = 0
    methods_added = 0
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        if repositories.stages.count() == 0:
            for name in DEFAULT_STAGES:
                repositories.stages.add(Stage(name=name))
            stages_added = len(DEFAULT_STAGES)
        else:
            log.debug("Stages already present, skipping seed")

        if repositories.stage_methods.count() == 0:
            for name in DEFAULT_STAGE_METHODS:
                repositories.stage_methods.add(StageMethod(name=name))
            methods_added = len(DEFAULT_STAGE_METHODS)
        else:
            log.debug("Stage methods already present, skipping seed")

        if stages_added or methods_added:
            uow.commit()
            log.info("Seeded %s stages and %s stage methods", stages_added, methods_added)

    return SeedResult(stages_added=stages_added, stage_methods_added=methods_added)
