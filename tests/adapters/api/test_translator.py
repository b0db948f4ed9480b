from __future__ import annotations

from interviewdesk.adapters.api.schema import ApiInterview, InterviewListAdapter
from interviewdesk.adapters.api.translator import (
    create_request_body,
    translate_interview,
    update_request_body,
)
from interviewdesk.domain.ports.remote import CreateInterviewPayload, UpdateInterviewPayload


def test_translate_interview_keeps_raw_strings_for_dates_and_outcome() -> None:
    payload = ApiInterview.model_validate(
        {
            "id": 11,
            "jobTitle": "Data Engineer",
            "company": {"id": 1, "name": "Initech"},
            "applicationDate": "2025-01-05",
            "outcome": "scheduled",
        }
    )

    interview = translate_interview(payload)

    assert interview.application_date == "2025-01-05"
    assert interview.outcome == "scheduled"
    assert interview.stage is None
    assert interview.stage_method is None
    assert interview.metadata is None


def test_interview_list_tolerates_unknown_keys() -> None:
    payload = InterviewListAdapter.validate_python(
        [
            {
                "id": 1,
                "jobTitle": "QA",
                "company": {"id": 9, "name": "Hooli", "userId": 3},
                "applicationDate": "2025-02-01T00:00:00Z",
                "createdAt": "2025-02-01T00:00:00Z",
            }
        ]
    )

    assert payload[0].company.name == "Hooli"


def test_create_request_body_uses_wire_names() -> None:
    body = create_request_body(
        CreateInterviewPayload(
            stage="Phone Screen",
            company_name="Acme",
            job_title="SRE",
            client_company="Umbrella",
            date="2025-03-10T14:30:00Z",
            interviewer="Kim",
            location_type="phone",
            interview_link="tel:123",
            notes="call back",
        )
    )

    assert body == {
        "stage": "Phone Screen",
        "companyName": "Acme",
        "clientCompany": "Umbrella",
        "jobTitle": "SRE",
        "date": "2025-03-10T14:30:00Z",
        "interviewer": "Kim",
        "locationType": "phone",
        "interviewLink": "tel:123",
        "notes": "call back",
    }


def test_update_request_body_drops_unset_fields() -> None:
    body = update_request_body(UpdateInterviewPayload(stage="Final Stage", notes="offer soon"))

    assert body == {"stage": "Final Stage", "notes": "offer soon"}
