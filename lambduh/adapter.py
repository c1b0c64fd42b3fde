"""Adapter turning a typed request handler into an API Gateway Lambda handler.

The adapter decodes the four request parts and the authorizer claims of a
proxy event, enforces the claims requirement, calls the wrapped handler with
a typed Request and renders the outcome as a {statusCode, body} response.
"""

import asyncio
import inspect
import time
import uuid
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Generic, Optional, TypeVar

from lambduh.config import settings
from lambduh.decoding import Decoder, NoOpDecoder, as_decoder, decode
from lambduh.events import (
    PARTS,
    decode_base64_body,
    get_authorizer_claims,
    get_correlation_id,
    get_request_part,
)
from lambduh.exceptions import RequestValidationError, UnauthorizedError
from lambduh.failures import DeclaredFailure, Failure, ValidationFailure, classify
from lambduh.logging.config import configure_logging, get_logger
from lambduh.models.claims import Claims
from lambduh.serialization import build_response

logger = get_logger(__name__)

P = TypeVar("P")
Q = TypeVar("Q")
B = TypeVar("B")
H = TypeVar("H")
C = TypeVar("C")


@dataclass(frozen=True)
class Request(Generic[P, Q, B, H, C]):
    """
    Decoded request handed to the wrapped handler.

    Attributes:
        path: Decoded path parameters
        query: Decoded query string parameters
        body: Decoded body
        headers: Decoded headers
        claims: Decoded authorizer claims, None when the event had none
    """

    path: P
    query: Q
    body: B
    headers: H
    claims: Optional[C] = None


@dataclass(frozen=True)
class AdapterOptions:
    """
    Shapes to decode each request part against.

    A part left as None accepts anything. claims_type defaults to Claims.

    Attributes:
        path_type: Shape of pathParameters
        query_type: Shape of queryStringParameters
        body_type: Shape of the body (JSON text is parsed by the decoder)
        headers_type: Shape of headers
        claims_type: Shape of requestContext authorizer claims
        claims_required: Reject requests without valid claims with 401
    """

    path_type: Any = None
    query_type: Any = None
    body_type: Any = None
    headers_type: Any = None
    claims_type: Any = Claims
    claims_required: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.claims_required, bool):
            raise TypeError(
                f"claims_required must be a bool, got {self.claims_required!r}"
            )


Handler = Callable[[Request, dict, Any], Any]


def _log_invocation_start(
    event: Any, context: Any, correlation_id: str
) -> None:
    """
    Log the start of an invocation.

    Args:
        event: The raw proxy event
        context: The Lambda context object
        correlation_id: The correlation ID for this invocation
    """
    extra: dict[str, Any] = {
        "correlation_id": correlation_id,
        "function_name": getattr(context, "function_name", None),
    }
    if isinstance(event, Mapping):
        extra["method"] = event.get("httpMethod") or event.get("routeKey")
        extra["path"] = event.get("path") or event.get("rawPath")
        if settings.log_events:
            extra["event_keys"] = sorted(str(key) for key in event)

    logger.info("Invocation started", extra=extra)


def _log_failure(failure: Failure, exc: Exception, correlation_id: str) -> None:
    """
    Log a failure at a level matching its class.

    Args:
        failure: Classification of the exception
        exc: The exception caught by the pipeline
        correlation_id: The correlation ID for this invocation
    """
    if isinstance(failure, ValidationFailure):
        logger.warning(
            "Request validation failed",
            extra={"correlation_id": correlation_id, "violations": failure.violations},
        )
    elif isinstance(failure, DeclaredFailure):
        extra = {
            "correlation_id": correlation_id,
            "status_code": failure.status_code,
            "error": failure.error,
        }
        if failure.status_code >= 500:
            logger.error("Handler raised HTTP error", extra=extra)
        else:
            logger.info("Handler raised HTTP error", extra=extra)
    else:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=exc,
            extra={
                "correlation_id": correlation_id,
                "exception_type": type(exc).__name__,
            },
        )


def _log_invocation_complete(
    response: dict[str, Any], correlation_id: str, elapsed_ms: float
) -> None:
    """
    Log the completion of an invocation.

    Args:
        response: The response being returned
        correlation_id: The correlation ID for this invocation
        elapsed_ms: Time elapsed during the invocation
    """
    logger.info(
        "Invocation completed",
        extra={
            "correlation_id": correlation_id,
            "status_code": response["statusCode"],
            "response_time_ms": round(elapsed_ms, 2),
        },
    )


class LambdaAdapter:
    """
    Lambda entry point wrapping a typed request handler.

    Decoders are built once from the options and only read afterwards, so one
    adapter can serve concurrent invocations.
    """

    def __init__(self, handler: Handler, options: Optional[AdapterOptions] = None) -> None:
        """
        Build the entry point.

        Args:
            handler: Callable taking (request, event, context); may be async
            options: Shapes and claims policy, defaults to AdapterOptions()

        Raises:
            TypeError: If handler is not callable or a shape is unsupported
        """
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {handler!r}")

        self.handler = handler
        self.options = options if options is not None else AdapterOptions()

        self._decoders: Mapping[str, Decoder] = MappingProxyType(
            {
                "path": as_decoder(self.options.path_type, "path"),
                "query": as_decoder(self.options.query_type, "query"),
                "body": as_decoder(self.options.body_type, "body"),
                "headers": as_decoder(self.options.headers_type, "headers"),
            }
        )
        claims_type = self.options.claims_type
        self._claims_decoder = as_decoder(
            Claims if claims_type is None else claims_type, "claims"
        )

        if settings.configure_logging:
            configure_logging()

    def __repr__(self) -> str:
        name = getattr(self.handler, "__qualname__", repr(self.handler))
        return f"LambdaAdapter({name}, {self.options!r})"

    async def _decode_request(self, event: Mapping[str, Any]) -> Request:
        """
        Decode every part of the event into a Request.

        All parts and the claims are attempted before anything is rejected.

        Raises:
            UnauthorizedError: If claims are required and none decoded
            RequestValidationError: With the violations of every failed part
        """
        decoded: dict[str, Any] = {}
        violations: list[dict[str, Any]] = []

        for part in PARTS:
            try:
                raw = get_request_part(event, part)
                if part == "body" and not isinstance(self._decoders[part], NoOpDecoder):
                    raw = decode_base64_body(event, raw)
                decoded[part] = await decode(self._decoders[part], raw, part)
            except RequestValidationError as exc:
                violations.extend(exc.violations)

        claims = None
        raw_claims = get_authorizer_claims(event)
        if raw_claims is not None:
            try:
                claims = await decode(self._claims_decoder, raw_claims, "claims")
            except RequestValidationError as exc:
                violations.extend(exc.violations)

        if self.options.claims_required and claims is None:
            raise UnauthorizedError()

        if violations:
            raise RequestValidationError(violations)

        return Request(claims=claims, **decoded)

    async def _run(self, event: Mapping[str, Any], context: Any) -> dict[str, Any]:
        request = await self._decode_request(event)
        result = self.handler(request, event, context)
        if inspect.isawaitable(result):
            result = await result
        return build_response(200, result)

    async def invoke(self, event: Mapping[str, Any], context: Any) -> dict[str, Any]:
        """
        Process one proxy event.

        Never raises for failures of the pipeline or the handler; every
        outcome becomes a response.

        Args:
            event: API Gateway proxy event
            context: Lambda context object

        Returns:
            Dict with statusCode and body
        """
        correlation_id = get_correlation_id(event, context) or str(uuid.uuid4())
        start_time = time.time()
        _log_invocation_start(event, context, correlation_id)

        try:
            response = await self._run(event, context)
        except Exception as exc:
            failure = classify(exc)
            _log_failure(failure, exc, correlation_id)
            response = failure.to_response()

        elapsed_ms = (time.time() - start_time) * 1000
        _log_invocation_complete(response, correlation_id, elapsed_ms)
        return response

    def __call__(
        self,
        event: Mapping[str, Any],
        context: Any,
        callback: Optional[Callable[[Optional[Exception], dict[str, Any]], Any]] = None,
    ) -> dict[str, Any]:
        """
        Synchronous Lambda handler.

        Runs the invocation on a fresh event loop. When a callback is given it
        receives (None, response) exactly once; the response is also returned.

        Called from inside a running event loop, the invocation gets its own
        loop on a worker thread and this call blocks until it finishes. Async
        callers should await invoke() instead.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            response = asyncio.run(self.invoke(event, context))
        else:
            with ThreadPoolExecutor(max_workers=1) as executor:
                response = executor.submit(
                    asyncio.run, self.invoke(event, context)
                ).result()
        if callback is not None:
            callback(None, response)
        return response


def adapt(handler: Handler) -> LambdaAdapter:
    """
    Wrap a handler with default options: no shapes, optional claims.

    Usable as a decorator.
    """
    return LambdaAdapter(handler, AdapterOptions())


def adapt_with(options: AdapterOptions, handler: Handler) -> LambdaAdapter:
    """
    Wrap a handler with explicit options.

    Args:
        options: Shapes and claims policy
        handler: Callable taking (request, event, context); may be async

    Raises:
        TypeError: If options is not an AdapterOptions
    """
    if not isinstance(options, AdapterOptions):
        raise TypeError(f"options must be AdapterOptions, got {options!r}")
    return LambdaAdapter(handler, options)
