"""
Base building blocks:
local identity, remote identity, named reference entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import ClassVar

from interviewdesk.domain.model.enums import ReferenceKind


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(eq=False, kw_only=True)
class Entity:
    """Local surrogate ``id`` is assigned by the store; ``remote_id`` by the server."""

    id: int | None = None
    remote_id: int | None = None

    @property
    def is_guest_local(self) -> bool:
        """A record the server has never acknowledged."""
        return self.remote_id is None


@dataclass(eq=False, kw_only=True)
class ReferenceEntity(Entity):
    """Named rows that interviews reference (company, stage, stage method)."""

    # class-level discriminator; subclasses must override
    KIND: ClassVar[ReferenceKind]

    name: str

    @property
    def kind(self) -> ReferenceKind:
        return self.KIND
