"""Public domain model surface."""

from __future__ import annotations

from interviewdesk.domain.model.base import Entity, ReferenceEntity, utcnow
from interviewdesk.domain.model.enums import InterviewOutcome, ReferenceKind
from interviewdesk.domain.model.tracking import (
    Company,
    Interview,
    InterviewMetadata,
    Stage,
    StageMethod,
)

REFERENCE_CLASS_BY_KIND: dict[ReferenceKind, type[ReferenceEntity]] = {
    ReferenceKind.COMPANY: Company,
    ReferenceKind.STAGE: Stage,
    ReferenceKind.STAGE_METHOD: StageMethod,
}

__all__ = [
    "REFERENCE_CLASS_BY_KIND",
    "Company",
    "Entity",
    "Interview",
    "InterviewMetadata",
    "InterviewOutcome",
    "ReferenceEntity",
    "ReferenceKind",
    "Stage",
    "StageMethod",
    "utcnow",
]
