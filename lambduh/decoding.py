"""Decoders that turn raw request parts into validated values.

A decoder is any callable taking the raw value of one request part and
returning the decoded value (or an awaitable of it). Rejections are reported
by raising RequestValidationError. Pydantic does the actual work: a declared
shape is anything pydantic.TypeAdapter accepts (BaseModel subclasses,
dataclasses, TypedDicts, builtin generics).
"""

import inspect
from typing import Any, Protocol, get_origin, runtime_checkable

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from lambduh.exceptions import RequestValidationError


@runtime_checkable
class Decoder(Protocol):
    """Callable converting one raw request part into a typed value."""

    def __call__(self, raw: Any) -> Any:
        ...


class Empty(BaseModel):
    """Decoded value of a part with no declared shape."""

    model_config = ConfigDict(frozen=True)


def format_violations(exc: ValidationError, part: str) -> list[dict[str, Any]]:
    """
    Flatten a pydantic ValidationError into field-level violations.

    Args:
        exc: Error raised by pydantic
        part: Request part name used as the field path prefix

    Returns:
        Ordered list of {"field", "message", "type"} dicts
    """
    violations = []
    for error in exc.errors(include_url=False, include_context=False, include_input=False):
        field = ".".join([part, *(str(loc) for loc in error["loc"])])
        msg = error["msg"]
        if error["type"] == "missing":
            msg = "Field is required"
        violations.append({"field": field, "message": msg, "type": error["type"]})
    return violations


class NoOpDecoder:
    """Accepts any input and maps it to an empty value without parsing it."""

    def __call__(self, raw: Any) -> Empty:
        return Empty()

    def __repr__(self) -> str:
        return "NoOpDecoder()"


class ShapeDecoder:
    """
    Validate a raw part against a declared shape.

    Text input is handed to pydantic's JSON parser; mappings and other
    Python values are validated directly.
    """

    def __init__(self, shape: Any, part: str) -> None:
        """
        Build the decoder.

        Args:
            shape: Type pydantic can build a TypeAdapter for
            part: Request part name, used to prefix violation fields

        Raises:
            TypeError: If pydantic cannot generate a schema for shape
        """
        try:
            self._adapter = TypeAdapter(shape)
        except Exception as exc:
            raise TypeError(f"Unsupported {part} shape {shape!r}: {exc}") from exc
        self.shape = shape
        self.part = part

    def __call__(self, raw: Any) -> Any:
        try:
            if isinstance(raw, (str, bytes, bytearray)):
                return self._adapter.validate_json(raw)
            return self._adapter.validate_python(raw)
        except ValidationError as exc:
            raise RequestValidationError(format_violations(exc, self.part)) from exc

    def __repr__(self) -> str:
        return f"ShapeDecoder({self.shape!r}, part={self.part!r})"


def as_decoder(shape: Any, part: str) -> Decoder:
    """
    Normalize a declared shape into a decoder.

    Args:
        shape: None (accept anything), a decoder callable, or a type
        part: Request part name

    Returns:
        Decoder for the part
    """
    if shape is None:
        return NoOpDecoder()
    if isinstance(shape, (NoOpDecoder, ShapeDecoder)):
        return shape
    if callable(shape) and not isinstance(shape, type) and get_origin(shape) is None:
        return shape
    return ShapeDecoder(shape, part)


async def decode(decoder: Decoder, raw: Any, part: str) -> Any:
    """
    Run a decoder, awaiting its result when it is asynchronous.

    Pydantic errors escaping a custom decoder are reported the same way
    ShapeDecoder reports them.

    Raises:
        RequestValidationError: If the decoder rejects the input
    """
    try:
        value = decoder(raw)
        if inspect.isawaitable(value):
            value = await value
    except ValidationError as exc:
        raise RequestValidationError(format_violations(exc, part)) from exc
    return value
