"""Permission checking against SpiceDB.

This module provides the caller-facing API: build a check request, dispatch
it, and classify the reply into an outcome.
"""

import asyncio
from collections.abc import Iterable
from types import TracebackType
from typing import TYPE_CHECKING

import structlog

from spicecheck.dispatch import CheckDispatcher, CheckTransport
from spicecheck.errors import DispatchFailure
from spicecheck.outcomes import CheckOutcome, Failed, OutcomeKind, Unrecognized, classify
from spicecheck.schemas import CheckRequest, ObjectReference, build_check_request


if TYPE_CHECKING:
    from spicecheck.config import Settings


logger = structlog.get_logger()

_LOG_LEVELS = {
    OutcomeKind.GRANTED: "info",
    OutcomeKind.DENIED: "info",
    OutcomeKind.INDETERMINATE: "warning",
    OutcomeKind.UNRECOGNIZED: "error",
    OutcomeKind.FAILED: "error",
}


class Checker:
    """Service for checking permissions against SpiceDB.

    Each check is independent; the transport is the only shared state and
    may be used by many checks at once.

    Example:
        async with Checker.from_settings(get_settings()) as checker:
            outcome = await checker.check(
                ObjectReference(object_type="task", object_id="task-001"),
                "view",
                ObjectReference(object_type="user", object_id="user-001"),
            )
    """

    def __init__(self, transport: CheckTransport, timeout: float | None = None) -> None:
        self.transport = transport
        self.dispatcher = CheckDispatcher(transport, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Checker":
        """Create a checker connected to the configured SpiceDB endpoint."""
        from spicecheck.transport import AuthzedTransport

        return cls(AuthzedTransport.from_settings(settings), timeout=settings.timeout)

    async def __aenter__(self) -> "Checker":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport."""
        self.transport.close()

    async def check(
        self,
        resource: ObjectReference,
        permission: str,
        subject: ObjectReference,
    ) -> CheckOutcome:
        """Check if a subject has a permission on a resource.

        Args:
            resource: The resource being accessed (e.g., task:task-001)
            permission: The permission to check (e.g., "view")
            subject: The subject requesting access (e.g., user:user-001)

        Returns:
            The outcome of the check; dispatch failures are returned as Failed
        """
        return await self.check_request(build_check_request(resource, permission, subject))

    async def check_request(self, request: CheckRequest) -> CheckOutcome:
        """Dispatch a prebuilt request and classify the reply.

        Args:
            request: The check to perform

        Returns:
            The outcome of the check
        """
        outcome: CheckOutcome
        try:
            permissionship = await self.dispatcher.dispatch(request)
        except DispatchFailure as exc:
            outcome = Failed(exc.error if exc.error is not None else exc)
        else:
            outcome = classify(permissionship)

        _log_outcome(request, outcome)
        return outcome

    async def check_many(self, requests: Iterable[CheckRequest]) -> list[CheckOutcome]:
        """Run several independent checks concurrently.

        Args:
            requests: The checks to perform

        Returns:
            One outcome per request, in the same order
        """
        return list(await asyncio.gather(*(self.check_request(r) for r in requests)))


def _log_outcome(request: CheckRequest, outcome: CheckOutcome) -> None:
    """Log an outcome at a level matching its kind."""
    log_data: dict[str, object] = {
        "resource": str(request.resource),
        "permission": request.permission,
        "subject": str(request.subject),
        "outcome": str(outcome.kind),
    }

    match outcome:
        case Failed(error=error):
            log_data["error"] = str(error)
            log_data["error_type"] = type(error).__name__
        case Unrecognized(value=value):
            log_data["permissionship"] = value

    getattr(logger, _LOG_LEVELS[outcome.kind])("permission_check_completed", **log_data)


async def check_permission(
    transport: CheckTransport,
    resource: ObjectReference,
    permission: str,
    subject: ObjectReference,
    timeout: float | None = None,
) -> CheckOutcome:
    """Convenience function for a one-off check over an existing transport.

    The transport is left open.

    Args:
        transport: Client used to reach SpiceDB
        resource: The resource being accessed
        permission: The permission to check
        subject: The subject requesting access
        timeout: Seconds to wait for the reply

    Returns:
        The outcome of the check
    """
    return await Checker(transport, timeout=timeout).check(resource, permission, subject)
