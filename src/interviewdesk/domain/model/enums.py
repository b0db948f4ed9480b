"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class InterviewOutcome(StrEnum):
    SCHEDULED = "SCHEDULED"
    PASSED = "PASSED"
    REJECTED = "REJECTED"
    AWAITING_RESPONSE = "AWAITING_RESPONSE"
    OFFER_RECEIVED = "OFFER_RECEIVED"
    OFFER_ACCEPTED = "OFFER_ACCEPTED"
    OFFER_DECLINED = "OFFER_DECLINED"
    WITHDREW = "WITHDREW"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class ReferenceKind(StrEnum):
    """Reference entity kinds that interviews point at."""

    COMPANY = "company"
    STAGE = "stage"
    STAGE_METHOD = "stage_method"

    @property
    def interview_attribute(self) -> str:
        """Name of the attribute on ``Interview`` holding this kind of reference."""
        return self.value
