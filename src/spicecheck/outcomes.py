"""Classification of permission check replies.

SpiceDB answers a check with a permissionship code. Three codes are known;
the enumeration may grow, so any other code is kept as ``Unrecognized``
instead of being folded into a grant or a denial.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar


class Permissionship(IntEnum):
    """Known permissionship codes of a CheckPermission response."""

    UNSPECIFIED = 0
    NO_PERMISSION = 1
    HAS_PERMISSION = 2


class OutcomeKind(str, Enum):
    """Caller-visible kinds of check outcome."""

    DENIED = "denied"
    GRANTED = "granted"
    INDETERMINATE = "indeterminate"
    UNRECOGNIZED = "unrecognized"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Denied:
    """The service explicitly answered that permission is not held."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.DENIED

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return "No permission... go away"


@dataclass(frozen=True, slots=True)
class Granted:
    """The service explicitly answered that permission is held."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.GRANTED

    @property
    def allowed(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return "You do have permission. Go ahead!"


@dataclass(frozen=True, slots=True)
class Indeterminate:
    """The service could not determine permission (e.g., missing data).

    Neither a grant nor a denial.
    """

    kind: ClassVar[OutcomeKind] = OutcomeKind.INDETERMINATE

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return "Unknown permissionship!? What are you doing here?"


@dataclass(frozen=True, slots=True)
class Unrecognized:
    """The service sent a permissionship code this client does not know."""

    value: int
    kind: ClassVar[OutcomeKind] = OutcomeKind.UNRECOGNIZED

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Unknown permissionship: {self.value}"


@dataclass(frozen=True, slots=True)
class Failed:
    """No answer was obtained from the service.

    Attributes:
        error: The underlying transport or service error
    """

    error: BaseException
    kind: ClassVar[OutcomeKind] = OutcomeKind.FAILED

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"Error checking permission: {self.error}"


CheckOutcome = Denied | Granted | Indeterminate | Unrecognized | Failed


def classify(permissionship: int) -> CheckOutcome:
    """Map a permissionship code to an outcome.

    Args:
        permissionship: Raw code from a CheckPermission response

    Returns:
        Denied, Granted or Indeterminate for known codes, Unrecognized otherwise
    """
    match permissionship:
        case Permissionship.NO_PERMISSION:
            return Denied()
        case Permissionship.HAS_PERMISSION:
            return Granted()
        case Permissionship.UNSPECIFIED:
            return Indeterminate()
        case _:
            return Unrecognized(int(permissionship))
