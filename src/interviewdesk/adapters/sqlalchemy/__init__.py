"""SQLAlchemy adapter package for the local interview store."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCompanyRepository,
    SqlAlchemyInterviewRepository,
    SqlAlchemyStageMethodRepository,
    SqlAlchemyStageRepository,
)
from .unit_of_work import (
    SqlAlchemyTrackerUnitOfWork,
    StartupError,
    shutdown,
    startup,
    store_changes,
)

__all__ = [
    "SqlAlchemyCompanyRepository",
    "SqlAlchemyInterviewRepository",
    "SqlAlchemyStageMethodRepository",
    "SqlAlchemyStageRepository",
    "SqlAlchemyTrackerUnitOfWork",
    "StartupError",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "store_changes",
]
