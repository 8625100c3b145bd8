"""Exceptions raised by spicecheck.

Service answers (denied, indeterminate, unrecognized) are outcomes, not
exceptions. Only caller mistakes, configuration problems and failed calls to
the authorization service are represented here.
"""

from typing import Any


class SpiceCheckError(Exception):
    """Base exception for all spicecheck errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidReferenceError(SpiceCheckError, ValueError):
    """Raised when text cannot be parsed into an object reference.

    Example:
        raise InvalidReferenceError(
            "Expected 'type:id'", details={"value": "document"}
        )
    """

    message = "Invalid object reference"
    error_code = "invalid_reference"

    def __init__(
        self,
        message: str | None = None,
        value: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if value is not None:
            details["value"] = value
        super().__init__(message=message, details=details, **kwargs)


class ConfigurationError(SpiceCheckError):
    """Raised when settings are unusable for the current environment."""

    message = "Invalid configuration"
    error_code = "configuration_error"


class DispatchFailure(SpiceCheckError):
    """Raised when a permission check could not be answered.

    Covers transport errors (connection refused, timeout, TLS or auth
    failures) and requests rejected by the service. The original error is
    kept on ``error`` and chained as ``__cause__``.

    Example:
        raise DispatchFailure(error=exc) from exc
    """

    message = "Permission check dispatch failed"
    error_code = "dispatch_failed"

    def __init__(
        self,
        message: str | None = None,
        error: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        self.error = error
        details = kwargs.pop("details", {})
        if error is not None:
            details["error_type"] = type(error).__name__
            message = message or f"{self.message}: {error}"
        super().__init__(message=message, details=details, **kwargs)
