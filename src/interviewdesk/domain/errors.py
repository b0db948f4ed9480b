"""Error taxonomy shared by the remote client and the reconciliation passes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from interviewdesk.domain.model import ReferenceKind


class SyncError(RuntimeError):
    """Base class for every failure a sync pass can surface."""


class UnauthorizedError(SyncError):
    """The server answered HTTP 401."""

    def __init__(self, message: str = "Unauthorized. Please sign in.") -> None:
        super().__init__(message)


class InvalidResponseError(SyncError):
    """The server answered with something that is not a usable HTTP response."""

    def __init__(self, message: str = "Invalid response from server") -> None:
        super().__init__(message)


class NetworkError(SyncError):
    """Transport-level failure (DNS, connect, timeout, reset)."""


class ServerError(SyncError):
    """Any non-2xx answer other than 401."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"Server error: {message}")
        self.message = message
        self.status_code = status_code


class DecodingError(SyncError):
    """The response body does not match the expected schema."""


class NotAuthenticatedError(SyncError):
    """An operation that writes to the server was attempted without a token."""

    def __init__(self, message: str = "You must be signed in to sync") -> None:
        super().__init__(message)


class SyncInProgressError(SyncError):
    """A pass was requested while another one holds the same flag."""


class PartialMigrationFailure(SyncError):
    """Some guest interviews were pushed, others were not."""

    def __init__(
        self,
        succeeded: int,
        failed: int,
        *,
        errors: Sequence[SyncError] = (),
    ) -> None:
        super().__init__(
            f"Migration partially completed: {succeeded} succeeded, {failed} failed"
        )
        self.succeeded = succeeded
        self.failed = failed
        self.errors = tuple(errors)


class DeduplicationError(SyncError):
    """One or more entity kinds could not be deduplicated."""

    def __init__(self, failures: Mapping[ReferenceKind, BaseException]) -> None:
        kinds = ", ".join(sorted(str(kind) for kind in failures))
        super().__init__(f"Deduplication failed for: {kinds}")
        self.failures = dict(failures)
