"""Translate between API schemas and the remote port records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from interviewdesk.domain.ports.remote import (
    RemoteInterview,
    RemoteMetadata,
    RemoteReference,
)

from .schema import (
    ApiCompany,
    ApiInterview,
    ApiStage,
    ApiStageMethod,
    CreateInterviewRequest,
    UpdateInterviewRequest,
)

if TYPE_CHECKING:
    from interviewdesk.domain.ports.remote import CreateInterviewPayload, UpdateInterviewPayload


def translate_company(payload: ApiCompany) -> RemoteReference:
    return RemoteReference(remote_id=payload.id, name=payload.name)


def translate_stage(payload: ApiStage) -> RemoteReference:
    return RemoteReference(remote_id=payload.id, name=payload.stage)


def translate_stage_method(payload: ApiStageMethod) -> RemoteReference:
    return RemoteReference(remote_id=payload.id, name=payload.method)


def translate_interview(payload: ApiInterview) -> RemoteInterview:
    metadata = None
    if payload.metadata is not None:
        metadata = RemoteMetadata(
            job_listing=payload.metadata.job_listing,
            location=payload.metadata.location,
        )
    return RemoteInterview(
        remote_id=payload.id,
        job_title=payload.job_title,
        company=translate_company(payload.company),
        application_date=payload.application_date,
        interviewer=payload.interviewer,
        client_company=payload.client_company,
        stage=translate_stage(payload.stage) if payload.stage else None,
        stage_method=(
            translate_stage_method(payload.stage_method) if payload.stage_method else None
        ),
        date=payload.date,
        deadline=payload.deadline,
        outcome=payload.outcome,
        notes=payload.notes,
        metadata=metadata,
        link=payload.link,
    )


def create_request_body(payload: CreateInterviewPayload) -> dict[str, Any]:
    request = CreateInterviewRequest(
        stage=payload.stage,
        company_name=payload.company_name,
        client_company=payload.client_company,
        job_title=payload.job_title,
        job_posting_link=payload.job_posting_link,
        date=payload.date,
        deadline=payload.deadline,
        interviewer=payload.interviewer,
        location_type=payload.location_type,
        interview_link=payload.interview_link,
        notes=payload.notes,
    )
    return request.model_dump(by_alias=True, exclude_none=True)


def update_request_body(payload: UpdateInterviewPayload) -> dict[str, Any]:
    request = UpdateInterviewRequest(
        outcome=payload.outcome,
        stage=payload.stage,
        date=payload.date,
        deadline=payload.deadline,
        interviewer=payload.interviewer,
        notes=payload.notes,
        link=payload.link,
    )
    return request.model_dump(by_alias=True, exclude_none=True)
