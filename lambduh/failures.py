"""Classification of caught exceptions into response-producing failures."""

from dataclasses import dataclass
from typing import Any, Union

from lambduh.exceptions import HttpError, RequestValidationError
from lambduh.serialization import build_response

INCORRECT_PARAMETERS = "Incorrect Parameters"


@dataclass(frozen=True)
class ValidationFailure:
    """One or more request parts were rejected by their decoders."""

    violations: list[dict[str, Any]]

    def to_response(self) -> dict[str, Any]:
        return build_response(
            400,
            {"statusCode": 400, "error": INCORRECT_PARAMETERS, "details": self.violations},
        )


@dataclass(frozen=True)
class DeclaredFailure:
    """An HttpError raised by the pipeline or the wrapped handler."""

    status_code: int
    error: str
    details: Any

    def to_response(self) -> dict[str, Any]:
        return build_response(
            self.status_code,
            {"statusCode": self.status_code, "error": self.error, "details": self.details},
        )


@dataclass(frozen=True)
class UnclassifiedFailure:
    """Anything else; surfaces as a 500 with the exception rendered as JSON."""

    raw: BaseException

    def to_response(self) -> dict[str, Any]:
        return build_response(500, self.raw)


Failure = Union[ValidationFailure, DeclaredFailure, UnclassifiedFailure]


def classify(exc: BaseException) -> Failure:
    """
    Tag a caught exception by its type.

    Only RequestValidationError and HttpError are recognized; attributes an
    unrelated exception happens to carry (status_code, __len__) are ignored.
    """
    if isinstance(exc, RequestValidationError):
        return ValidationFailure(violations=exc.violations)
    if isinstance(exc, HttpError):
        return DeclaredFailure(
            status_code=exc.status_code, error=exc.error, details=exc.details
        )
    return UnclassifiedFailure(raw=exc)
