from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from interviewdesk.adapters.api import InterviewsApiClient
from interviewdesk.adapters.http_resilience import ResilienceConfig, ResilientClient
from interviewdesk.config import ApiConfig, get_api_config
from interviewdesk.domain.model import Company, Stage, StageMethod
from interviewdesk.domain.reconciliation import SyncCoordinator
from tests.helpers.tracker import make_interview

if TYPE_CHECKING:
    from collections.abc import Callable

    from interviewdesk.adapters.sqlalchemy.unit_of_work import SqlAlchemyTrackerUnitOfWork

BASE_URL = "https://interviews.test/api"


class FakeServer:
    """Just enough of the interviews API to run a sign-in."""

    def __init__(self) -> None:
        self.companies: list[dict[str, Any]] = [{"id": 1, "name": "Acme"}]
        self.stages: list[dict[str, Any]] = [
            {"id": 1, "stage": "Phone Screen"},
            {"id": 2, "stage": "Technical Interview"},
        ]
        self.stage_methods: list[dict[str, Any]] = [{"id": 5, "method": "Video Call"}]
        self.interviews: list[dict[str, Any]] = []
        self.requests: list[str] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api/")
        self.requests.append(f"{request.method} {path}")
        if request.headers.get("Authorization") != "Bearer secret":
            return httpx.Response(401, json={"message": "Unauthorized"})
        if request.method == "GET":
            listing = {
                "companies": self.companies,
                "stages": self.stages,
                "stage-methods": self.stage_methods,
                "interviews": self.interviews,
            }
            return httpx.Response(200, json=listing[path])
        if request.method == "POST" and path == "interview":
            return httpx.Response(201, json=self._create(json.loads(request.content)))
        return httpx.Response(404, json={"message": f"No route for {path}"})

    def _create(self, body: dict[str, Any]) -> dict[str, Any]:
        company = next(item for item in self.companies if item["name"] == body["companyName"])
        stage = next(item for item in self.stages if item["stage"] == body["stage"])
        created = {
            "id": 100 + len(self.interviews),
            "jobTitle": body["jobTitle"],
            "company": company,
            "stage": stage,
            "stageMethod": self.stage_methods[0],
            "applicationDate": "2025-03-01T09:00:00.000Z",
            "date": body.get("date"),
            "outcome": "SCHEDULED",
            "notes": body.get("notes"),
            "metadata": {"jobListing": body.get("jobPostingLink")},
        }
        self.interviews.append(created)
        return created


def _make_client(server: FakeServer) -> InterviewsApiClient:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return server.handle(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(async_handler))

    base = get_api_config()
    config = ApiConfig(base_url=BASE_URL, auth_token=None, resilience=base.resilience)
    return InterviewsApiClient(config=config, client_factory=factory)


def _seed_guest_data(unit_of_work_factory: Callable[[], SqlAlchemyTrackerUnitOfWork]) -> None:
    with unit_of_work_factory() as uow:
        synced_screen = Stage(name="Phone Screen", remote_id=1)
        guest_screen = Stage(name="Phone Screen")
        guest_technical = Stage(name="Technical Interview")
        guest_video = StageMethod(name="Video Call")
        for stage in (synced_screen, guest_screen, guest_technical):
            uow.repositories.stages.add(stage)
        uow.repositories.stage_methods.add(guest_video)
        uow.repositories.interviews.add(
            make_interview(
                Company(name="Acme"),
                stage=guest_screen,
                stage_method=guest_video,
                notes="Ask about on-call",
                job_posting_link="https://jobs.example/1",
            )
        )
        uow.commit()


@pytest.mark.integration
def test_sign_in_converges_local_store_with_server(
    sqlite_unit_of_work: Callable[[], SqlAlchemyTrackerUnitOfWork],
) -> None:
    _seed_guest_data(sqlite_unit_of_work)
    server = FakeServer()
    coordinator = SyncCoordinator(
        client=_make_client(server),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    asyncio.run(coordinator.perform_sign_in("secret"))

    assert server.requests == [
        "GET companies",
        "POST interview",
        "GET companies",
        "GET stages",
        "GET stage-methods",
        "GET interviews",
    ]
    with sqlite_unit_of_work() as uow:
        stages = uow.repositories.stages.list_all()
        methods = uow.repositories.stage_methods.list_all()
        companies = uow.repositories.companies.list_all()
        [interview] = uow.repositories.interviews.list_all()

        assert [(stage.remote_id, stage.name) for stage in stages] == [
            (1, "Phone Screen"),
            (2, "Technical Interview"),
        ]
        assert [(method.remote_id, method.name) for method in methods] == [(5, "Video Call")]
        assert [(company.remote_id, company.name) for company in companies] == [(1, "Acme")]
        assert interview.remote_id == 100
        assert interview.company is companies[0]
        assert interview.stage is stages[0]
        assert interview.stage_method is methods[0]
        assert interview.notes == "Ask about on-call"
        assert interview.meta.job_listing == "https://jobs.example/1"
        assert uow.repositories.interviews.list_guest_local() == []
    assert coordinator.sync_error is None


@pytest.mark.integration
def test_refresh_twice_changes_nothing(
    sqlite_unit_of_work: Callable[[], SqlAlchemyTrackerUnitOfWork],
) -> None:
    _seed_guest_data(sqlite_unit_of_work)
    server = FakeServer()
    coordinator = SyncCoordinator(
        client=_make_client(server),
        unit_of_work_factory=sqlite_unit_of_work,
    )
    asyncio.run(coordinator.perform_sign_in("secret"))

    reconciled, deduplicated = asyncio.run(coordinator.refresh())

    assert reconciled.interviews.inserted == 0
    assert reconciled.interviews.updated == 0
    assert all(counts.inserted == 0 for counts in reconciled.references.values())
    assert deduplicated.total_removed == 0
    with sqlite_unit_of_work() as uow:
        assert uow.repositories.interviews.count() == 1
        assert uow.repositories.stages.count() == 2
