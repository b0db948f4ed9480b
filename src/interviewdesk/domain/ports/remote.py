"""Port for the remote interviews server.

The records below mirror the wire format: dates and outcomes stay raw strings
so the reconciliation passes decide how lenient to be when parsing them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(slots=True, frozen=True)
class RemoteReference:
    """A company, stage or stage method as the server knows it."""

    remote_id: int
    name: str


@dataclass(slots=True, frozen=True)
class RemoteMetadata:
    job_listing: str | None = None
    location: str | None = None


@dataclass(slots=True, frozen=True)
class RemoteInterview:
    remote_id: int
    job_title: str
    company: RemoteReference
    application_date: str
    interviewer: str | None = None
    client_company: str | None = None
    stage: RemoteReference | None = None
    stage_method: RemoteReference | None = None
    date: str | None = None
    deadline: str | None = None
    outcome: str | None = None
    notes: str | None = None
    metadata: RemoteMetadata | None = None
    link: str | None = None


@dataclass(slots=True, frozen=True)
class InterviewQuery:
    """Filters accepted by ``GET /interviews``."""

    date: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    include_past: bool | None = None
    company_id: int | None = None
    company: str | None = None
    outcome: str | None = None


@dataclass(slots=True, frozen=True)
class CreateInterviewPayload:
    stage: str
    company_name: str
    job_title: str
    client_company: str | None = None
    job_posting_link: str | None = None
    date: str | None = None
    deadline: str | None = None
    interviewer: str | None = None
    location_type: str | None = None
    interview_link: str | None = None
    notes: str | None = None


@dataclass(slots=True, frozen=True)
class UpdateInterviewPayload:
    """Partial update; ``None`` fields are left untouched by the server."""

    outcome: str | None = None
    stage: str | None = None
    date: str | None = None
    deadline: str | None = None
    interviewer: str | None = None
    notes: str | None = None
    link: str | None = None


@runtime_checkable
class RemoteClient(Protocol):
    """Typed access to the interviews REST resources.

    Implementations never retry; every failure surfaces as a
    ``interviewdesk.domain.errors.SyncError`` subclass.
    """

    @property
    def is_authenticated(self) -> bool: ...

    def set_auth_token(self, token: str | None) -> None: ...

    async def fetch_companies(self) -> Sequence[RemoteReference]: ...

    async def fetch_stages(self) -> Sequence[RemoteReference]: ...

    async def fetch_stage_methods(self) -> Sequence[RemoteReference]: ...

    async def fetch_interviews(
        self,
        query: InterviewQuery | None = None,
    ) -> Sequence[RemoteInterview]: ...

    async def create_interview(self, payload: CreateInterviewPayload) -> RemoteInterview: ...

    async def update_interview(
        self,
        remote_id: int,
        payload: UpdateInterviewPayload,
    ) -> RemoteInterview: ...
