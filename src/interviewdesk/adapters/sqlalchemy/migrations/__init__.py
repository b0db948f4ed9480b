"""Alembic migrations bundled with the SQLAlchemy adapter.

``upgrade_head`` is what ``startup()`` runs; the ``alembic`` command line reads
the same script location from ``[tool.alembic]`` in ``pyproject.toml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from interviewdesk.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent


def _build_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_PATH))
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Migrate the database behind ``engine`` (or ``database_uri``) to the latest revision.

    With an engine the upgrade runs on one of its connections, so in-memory
    SQLite databases are migrated in place.
    """

    config = _build_config()
    if engine is None:
        config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
        command.upgrade(config, "head")
        return
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
