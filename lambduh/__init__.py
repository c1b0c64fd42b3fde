"""Typed request decoding and uniform responses for API Gateway Lambda handlers."""

from lambduh.adapter import AdapterOptions, LambdaAdapter, Request, adapt, adapt_with
from lambduh.decoding import Decoder, Empty, NoOpDecoder, ShapeDecoder
from lambduh.exceptions import (
    HttpError,
    InvalidFormatError,
    NotFoundError,
    RequestValidationError,
    UnauthorizedError,
)
from lambduh.models.claims import Claims
from lambduh.serialization import convert_to_string

__version__ = "1.0.0"

__all__ = [
    "AdapterOptions",
    "Claims",
    "Decoder",
    "Empty",
    "HttpError",
    "InvalidFormatError",
    "LambdaAdapter",
    "NoOpDecoder",
    "NotFoundError",
    "Request",
    "RequestValidationError",
    "ShapeDecoder",
    "UnauthorizedError",
    "adapt",
    "adapt_with",
    "convert_to_string",
]
