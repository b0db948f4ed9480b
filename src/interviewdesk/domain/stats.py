"""Pipeline statistics over a set of interviews."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from interviewdesk.domain.model import InterviewOutcome

if TYPE_CHECKING:
    from collections.abc import Iterable

    from interviewdesk.domain.model import Interview

_APPLIED_STAGE = "Applied"


@dataclass(slots=True, frozen=True)
class InterviewStats:
    total_interviews: int = 0
    applied: int = 0
    scheduled: int = 0
    awaiting_response: int = 0
    passed: int = 0
    rejected: int = 0
    offer_received: int = 0
    offer_accepted: int = 0
    offer_declined: int = 0
    withdrew: int = 0

    @property
    def success_rate(self) -> float:
        """Passed as a percentage of decided interviews (passed + rejected)."""
        decided = self.passed + self.rejected
        if decided == 0:
            return 0.0
        return self.passed / decided * 100.0

    @property
    def response_rate(self) -> float:
        """Share of interviews past the application that got any answer."""
        expecting = self.total_interviews - self.applied
        if expecting <= 0:
            return 0.0
        responded = (
            self.passed
            + self.rejected
            + self.offer_received
            + self.offer_accepted
            + self.offer_declined
        )
        return responded / expecting * 100.0

    @property
    def active_interviews(self) -> int:
        return self.scheduled + self.awaiting_response

    @classmethod
    def compute(cls, interviews: Iterable[Interview]) -> InterviewStats:
        counts = dict.fromkeys(InterviewOutcome, 0)
        total = 0
        applied = 0
        for interview in interviews:
            total += 1
            stage_name = interview.stage.name if interview.stage is not None else None
            if interview.outcome is None:
                if stage_name == _APPLIED_STAGE:
                    applied += 1
                else:
                    counts[InterviewOutcome.SCHEDULED] += 1
                continue
            counts[interview.outcome] += 1

        return cls(
            total_interviews=total,
            applied=applied,
            scheduled=counts[InterviewOutcome.SCHEDULED],
            awaiting_response=counts[InterviewOutcome.AWAITING_RESPONSE],
            passed=counts[InterviewOutcome.PASSED],
            rejected=counts[InterviewOutcome.REJECTED],
            offer_received=counts[InterviewOutcome.OFFER_RECEIVED],
            offer_accepted=counts[InterviewOutcome.OFFER_ACCEPTED],
            offer_declined=counts[InterviewOutcome.OFFER_DECLINED],
            withdrew=counts[InterviewOutcome.WITHDREW],
        )
