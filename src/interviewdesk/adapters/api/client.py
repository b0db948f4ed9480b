"""HTTP client for the interviews REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from interviewdesk.adapters.http_resilience import ResilientClient
from interviewdesk.domain.errors import (
    DecodingError,
    InvalidResponseError,
    NetworkError,
    ServerError,
    UnauthorizedError,
)

from .schema import (
    CompanyListAdapter,
    ErrorResponse,
    InterviewAdapter,
    InterviewListAdapter,
    StageListAdapter,
    StageMethodListAdapter,
)
from .translator import (
    create_request_body,
    translate_company,
    translate_interview,
    translate_stage,
    translate_stage_method,
    update_request_body,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from pydantic import TypeAdapter

    from interviewdesk.config.api import ApiConfig
    from interviewdesk.config.http_resilience import ResilienceConfig
    from interviewdesk.domain.ports.remote import (
        CreateInterviewPayload,
        InterviewQuery,
        RemoteInterview,
        RemoteReference,
        UpdateInterviewPayload,
    )

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def _query_params(query: InterviewQuery | None) -> dict[str, str]:
    if query is None:
        return {}
    params: dict[str, str] = {}
    if query.date is not None:
        params["date"] = query.date
    if query.date_from is not None:
        params["dateFrom"] = query.date_from
    if query.date_to is not None:
        params["dateTo"] = query.date_to
    if query.include_past is not None:
        params["includePast"] = "true" if query.include_past else "false"
    if query.company_id is not None:
        params["companyId"] = str(query.company_id)
    if query.company is not None:
        params["company"] = query.company
    if query.outcome is not None:
        params["outcome"] = query.outcome
    return params


class InterviewsApiClient:
    """Typed access to ``/companies``, ``/stages``, ``/stage-methods`` and interviews.

    The bearer token is process-wide state set by the authentication flow and
    read when each request is built.
    """

    def __init__(
        self,
        *,
        config: ApiConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or _default_client_factory
        self._auth_token: str | None = config.auth_token

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    def set_auth_token(self, token: str | None) -> None:
        self._auth_token = token or None

    async def fetch_companies(self) -> list[RemoteReference]:
        payload = await self._request("GET", "companies", adapter=CompanyListAdapter)
        return [translate_company(item) for item in payload]

    async def fetch_stages(self) -> list[RemoteReference]:
        payload = await self._request("GET", "stages", adapter=StageListAdapter)
        return [translate_stage(item) for item in payload]

    async def fetch_stage_methods(self) -> list[RemoteReference]:
        payload = await self._request("GET", "stage-methods", adapter=StageMethodListAdapter)
        return [translate_stage_method(item) for item in payload]

    async def fetch_interviews(self, query: InterviewQuery | None = None) -> list[RemoteInterview]:
        payload = await self._request(
            "GET",
            "interviews",
            adapter=InterviewListAdapter,
            params=_query_params(query),
        )
        return [translate_interview(item) for item in payload]

    async def create_interview(self, payload: CreateInterviewPayload) -> RemoteInterview:
        created = await self._request(
            "POST",
            "interview",
            adapter=InterviewAdapter,
            body=create_request_body(payload),
        )
        return translate_interview(created)

    async def update_interview(
        self,
        remote_id: int,
        payload: UpdateInterviewPayload,
    ) -> RemoteInterview:
        updated = await self._request(
            "PUT",
            f"interview/{remote_id}",
            adapter=InterviewAdapter,
            body=update_request_body(payload),
        )
        return translate_interview(updated)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._auth_token is not None:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}/{path}"

    async def _request[T](
        self,
        method: str,
        path: str,
        *,
        adapter: TypeAdapter[T],
        params: dict[str, str] | None = None,
        body: dict[str, Any] | None = None,
    ) -> T:
        headers = self._headers()
        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.request(
                    method,
                    self._url(path),
                    params=params or None,
                    json=body,
                    headers=headers,
                )
        except httpx.TransportError as exc:
            log.warning("Interviews API %s %s failed: %s", method, path, exc)
            raise NetworkError(f"Network error: {exc}") from exc

        _raise_for_status(response)
        return _decode(response, adapter)


def _raise_for_status(response: httpx.Response) -> None:
    status = response.status_code
    if 200 <= status < 300:  # noqa: PLR2004
        return
    if status == httpx.codes.UNAUTHORIZED:
        raise UnauthorizedError
    message = _error_message(response)
    log.error("Interviews API error %s: %s", status, message)
    raise ServerError(message, status_code=status)


def _error_message(response: httpx.Response) -> str:
    try:
        return ErrorResponse.model_validate_json(response.content).message
    except ValidationError:
        return f"HTTP {response.status_code}"


def _decode[T](response: httpx.Response, adapter: TypeAdapter[T]) -> T:
    if not response.content.strip():
        raise InvalidResponseError
    try:
        return adapter.validate_json(response.content)
    except ValidationError as exc:
        raise DecodingError(f"Failed to parse response: {exc}") from exc

