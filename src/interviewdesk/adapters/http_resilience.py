"""Rate-limited async HTTP client shared by the API adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
from aiolimiter import AsyncLimiter

from interviewdesk.config.http_resilience import RateLimit, ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

__all__ = ["RateLimit", "ResilienceConfig", "ResilientClient", "shared_limiter"]

_LIMITERS: dict[tuple[str, RateLimit], AsyncLimiter] = {}


def shared_limiter(config: ResilienceConfig) -> AsyncLimiter | None:
    """Limiter shared by every client built from the same named config."""
    if config.ratelimit is None:
        return None
    key = (config.name, config.ratelimit)
    limiter = _LIMITERS.get(key)
    if limiter is None:
        limiter = AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
        _LIMITERS[key] = limiter
    return limiter


class ResilientClient:
    """``httpx.AsyncClient`` behind the shared rate limit of its config.

    Requests are sent exactly once; deciding whether to try again belongs to
    the caller.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter = shared_limiter(config)
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=config.timeout_seconds,
            headers=dict(config.default_headers or {}),
            transport=transport,
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request, waiting for the rate limiter first when one is configured."""
        if self._limiter is None:
            return await self._client.request(
                method, url, params=params, json=json, headers=headers
            )
        async with self._limiter:
            return await self._client.request(
                method, url, params=params, json=json, headers=headers
            )
