"""Interviews API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .errors import InvalidConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_INTERVIEWS_API_URL = "https://interviews.tools/api"
INTERVIEWS_API_TIMEOUT_SECONDS = 15.0


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Holds the interviews API location and the optional bearer token."""

    base_url: str
    auth_token: str | None
    resilience: ResilienceConfig


def get_api_config(*, resilience: ResilienceConfig | None = None) -> ApiConfig:
    base_url = (optional_env_var("INTERVIEWS_API_URL") or DEFAULT_INTERVIEWS_API_URL).rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise InvalidConfigurationError(f"INTERVIEWS_API_URL must be an http(s) URL: {base_url}")
    return ApiConfig(
        base_url=base_url,
        auth_token=optional_env_var("INTERVIEWS_API_TOKEN"),
        resilience=resilience
        or ResilienceConfig(
            name="interviews",
            base_url=base_url,
            timeout_seconds=INTERVIEWS_API_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={"Content-Type": "application/json"},
        ),
    )
