"""Lenient conversions between wire strings and domain values."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from interviewdesk.domain.model import InterviewOutcome

log = logging.getLogger(__name__)

_OUTCOME_BY_VALUE: dict[str, InterviewOutcome] = {
    outcome.value: outcome for outcome in InterviewOutcome
}


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date-time (``Z`` suffix and fractional seconds allowed).

    Naive values are taken as UTC. Absent or unparseable input yields ``None``.
    """

    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        log.debug("Unparseable date-time %r", value)
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_datetime(value: datetime | None) -> str | None:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_outcome(value: str | None) -> InterviewOutcome | None:
    """Exact, case-sensitive match against the outcome set; anything else is no outcome."""

    if value is None:
        return None
    outcome = _OUTCOME_BY_VALUE.get(value)
    if outcome is None:
        log.debug("Ignoring unknown outcome %r", value)
    return outcome
