"""Interviews REST API adapter."""

from __future__ import annotations

from interviewdesk.config.api import ApiConfig, get_api_config

from .client import InterviewsApiClient
from .schema import (
    ApiCompany,
    ApiInterview,
    ApiMetadata,
    ApiStage,
    ApiStageMethod,
    CreateInterviewRequest,
    ErrorResponse,
    UpdateInterviewRequest,
)

__all__ = [
    "ApiCompany",
    "ApiInterview",
    "ApiMetadata",
    "ApiStage",
    "ApiStageMethod",
    "CreateInterviewRequest",
    "ErrorResponse",
    "InterviewsApiClient",
    "UpdateInterviewRequest",
    "build_interviews_api_client",
]


def build_interviews_api_client(config: ApiConfig | None = None) -> InterviewsApiClient:
    """Create an API client from environment configuration."""
    return InterviewsApiClient(config=config or get_api_config())
