"""Pydantic schemas for permission check requests."""

from pydantic import BaseModel, ConfigDict, Field

from spicecheck.constants import REFERENCE_SEPARATOR
from spicecheck.errors import InvalidReferenceError


class ObjectReference(BaseModel):
    """A resource or subject, identified by type and id."""

    model_config = ConfigDict(frozen=True)

    object_type: str = Field(..., description="Namespace of the object (e.g., 'task')")
    object_id: str = Field(..., description="Id within the namespace (e.g., 'task-001')")

    @classmethod
    def parse(cls, value: str) -> "ObjectReference":
        """Parse a ``type:id`` string.

        Only the first separator splits the text, so ids may contain ``:``.

        Args:
            value: Text such as ``"user:user-001"``

        Returns:
            The parsed reference

        Raises:
            InvalidReferenceError: If the type or id is missing
        """
        object_type, sep, object_id = value.partition(REFERENCE_SEPARATOR)
        if not sep or not object_type or not object_id:
            raise InvalidReferenceError(
                f"Expected 'type{REFERENCE_SEPARATOR}id', got {value!r}",
                value=value,
            )
        return cls(object_type=object_type, object_id=object_id)

    def __str__(self) -> str:
        return f"{self.object_type}{REFERENCE_SEPARATOR}{self.object_id}"


class CheckRequest(BaseModel):
    """One authorization question: can ``subject`` exercise ``permission`` on ``resource``?"""

    model_config = ConfigDict(frozen=True)

    resource: ObjectReference = Field(..., description="Object being accessed")
    permission: str = Field(..., description="Permission name (e.g., 'view')")
    subject: ObjectReference = Field(..., description="Object requesting access")

    def __str__(self) -> str:
        return f"{self.subject} -> {self.permission} -> {self.resource}"


def build_check_request(
    resource: ObjectReference,
    permission: str,
    subject: ObjectReference,
) -> CheckRequest:
    """Assemble a check request.

    Identifiers are taken as given; rejecting empty ones is left to the
    caller or to the service.
    """
    return CheckRequest(resource=resource, permission=permission, subject=subject)
