"""Build server payloads from local interviews."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from interviewdesk.domain.ports.remote import CreateInterviewPayload, UpdateInterviewPayload
from interviewdesk.domain.reconciliation.parsing import format_datetime

if TYPE_CHECKING:
    from interviewdesk.domain.model import Interview

DEFAULT_STAGE_NAME: Final[str] = "Applied"
LOCATION_TYPE_LINK: Final[str] = "link"
LOCATION_TYPE_PHONE: Final[str] = "phone"


def location_type_for(interview: Interview) -> str:
    method = interview.stage_method
    if method is not None and "video" in method.name.lower():
        return LOCATION_TYPE_LINK
    return LOCATION_TYPE_PHONE


def create_payload(interview: Interview) -> CreateInterviewPayload:
    """Creation payload for a guest-local interview."""

    return CreateInterviewPayload(
        stage=interview.stage.name if interview.stage is not None else DEFAULT_STAGE_NAME,
        company_name=interview.company.name,
        job_title=interview.job_title,
        client_company=interview.client_company,
        job_posting_link=interview.job_listing,
        date=format_datetime(interview.date),
        deadline=format_datetime(interview.deadline),
        interviewer=interview.interviewer,
        location_type=location_type_for(interview),
        interview_link=interview.link,
        notes=interview.notes,
    )


def update_payload(interview: Interview) -> UpdateInterviewPayload:
    """Partial payload carrying the locally editable fields of a synced interview."""

    return UpdateInterviewPayload(
        outcome=interview.outcome.value if interview.outcome is not None else None,
        stage=interview.stage.name if interview.stage is not None else None,
        date=format_datetime(interview.date),
        deadline=format_datetime(interview.deadline),
        interviewer=interview.interviewer,
        notes=interview.notes,
        link=interview.link,
    )
