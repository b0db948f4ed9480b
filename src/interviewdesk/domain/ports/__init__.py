"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import (
    CompanyRepository,
    InterviewRepository,
    ReferenceRepository,
    Repository,
    StageMethodRepository,
    StageRepository,
)
from .remote import (
    CreateInterviewPayload,
    InterviewQuery,
    RemoteClient,
    RemoteInterview,
    RemoteMetadata,
    RemoteReference,
    UpdateInterviewPayload,
)
from .unit_of_work import (
    RepositoryCollection,
    TrackerRepositories,
    TrackerUnitOfWork,
    UnitOfWork,
)

__all__ = [
    "CompanyRepository",
    "CreateInterviewPayload",
    "InterviewQuery",
    "InterviewRepository",
    "ReferenceRepository",
    "RemoteClient",
    "RemoteInterview",
    "RemoteMetadata",
    "RemoteReference",
    "Repository",
    "RepositoryCollection",
    "StageMethodRepository",
    "StageRepository",
    "TrackerRepositories",
    "TrackerUnitOfWork",
    "UnitOfWork",
]
