"""spicecheck - permission checks against SpiceDB.

Example:
    >>> from spicecheck import Checker, ObjectReference, get_settings
    >>> async with Checker.from_settings(get_settings()) as checker:
    ...     outcome = await checker.check(
    ...         ObjectReference(object_type="task", object_id="task-001"),
    ...         "view",
    ...         ObjectReference(object_type="user", object_id="user-001"),
    ...     )
    >>> outcome.allowed
"""

from spicecheck.checker import Checker, check_permission
from spicecheck.config import Settings, get_settings
from spicecheck.dispatch import CheckDispatcher, CheckTransport, SingleShotReply
from spicecheck.errors import (
    ConfigurationError,
    DispatchFailure,
    InvalidReferenceError,
    SpiceCheckError,
)
from spicecheck.outcomes import (
    CheckOutcome,
    Denied,
    Failed,
    Granted,
    Indeterminate,
    OutcomeKind,
    Permissionship,
    Unrecognized,
    classify,
)
from spicecheck.schemas import CheckRequest, ObjectReference, build_check_request


__all__ = [
    "CheckDispatcher",
    "CheckOutcome",
    "CheckRequest",
    "CheckTransport",
    "Checker",
    "ConfigurationError",
    "Denied",
    "DispatchFailure",
    "Failed",
    "Granted",
    "Indeterminate",
    "InvalidReferenceError",
    "ObjectReference",
    "OutcomeKind",
    "Permissionship",
    "Settings",
    "SingleShotReply",
    "SpiceCheckError",
    "Unrecognized",
    "build_check_request",
    "check_permission",
    "classify",
    "get_settings",
]

__version__ = "0.1.0"
