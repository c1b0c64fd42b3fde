"""Exception classes surfaced to API callers as status-coded responses."""

from typing import Any


class HttpError(Exception):
    """Base exception for failures that map to a specific HTTP status."""

    def __init__(self, status_code: int, error: str, details: Any = None) -> None:
        """
        Initialize exception.

        Args:
            status_code: HTTP status code in the 4xx/5xx range
            error: Machine-readable error label, stable per failure kind
            details: Failure-specific detail payload

        Raises:
            ValueError: If status_code is not a 4xx or 5xx status
        """
        if isinstance(status_code, bool) or not isinstance(status_code, int):
            raise ValueError(f"status_code must be an int, got {status_code!r}")
        if not 400 <= status_code <= 599:
            raise ValueError(f"status_code must be in [400, 599], got {status_code}")
        super().__init__(error)
        self._status_code = status_code
        self._error = error
        self._details = details

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def error(self) -> str:
        return self._error

    @property
    def details(self) -> Any:
        return self._details

    def to_dict(self) -> dict[str, Any]:
        """Render the failure as the response body payload."""
        return {
            "statusCode": self.status_code,
            "error": self.error,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status_code={self.status_code}, "
            f"error={self.error!r}, details={self.details!r})"
        )


class NotFoundError(HttpError):
    """Raised when a model instance is not found (404)."""

    def __init__(self, model_name: str, model_id: str) -> None:
        super().__init__(
            status_code=404,
            error=f"Could not find the {model_name} with the given id",
            details=model_id,
        )


class InvalidFormatError(HttpError):
    """Raised by handlers when a payload fails domain validation (400)."""

    def __init__(self, validation_errors: list[Any]) -> None:
        super().__init__(
            status_code=400,
            error="Invalid Format",
            details=list(validation_errors),
        )


class UnauthorizedError(HttpError):
    """Raised when valid identity claims are required but missing (401)."""

    def __init__(self) -> None:
        super().__init__(status_code=401, error="unauthorized", details=None)


class RequestValidationError(Exception):
    """
    Raised by a decoder when a request part does not match its shape.

    This is deliberately not an HttpError: it originates in the decode step,
    and the adapter renders it as a 400 "Incorrect Parameters" response.
    """

    def __init__(self, violations: list[dict[str, Any]]) -> None:
        """
        Initialize exception.

        Args:
            violations: Ordered field-level violations, each a dict with
                "field", "message" and "type" keys
        """
        self.violations = list(violations)
        summary = "Invalid request"
        if self.violations:
            summary = str(self.violations[0].get("message", summary))
        if len(self.violations) > 1:
            summary += f" (and {len(self.violations) - 1} more errors)"
        super().__init__(summary)
