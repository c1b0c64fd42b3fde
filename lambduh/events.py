"""Accessors for the parts of an API Gateway proxy event."""

import base64
import binascii
from typing import Any, Mapping, Optional

from lambduh.exceptions import RequestValidationError

# Request parts in decode order
PARTS = ("path", "query", "body", "headers")


def _mapping_or_empty(value: Any) -> Any:
    return {} if value is None else value


def get_path_parameters(event: Mapping[str, Any]) -> Any:
    return _mapping_or_empty(event.get("pathParameters"))


def get_query_parameters(event: Mapping[str, Any]) -> Any:
    return _mapping_or_empty(event.get("queryStringParameters"))


def get_headers(event: Mapping[str, Any]) -> Any:
    return _mapping_or_empty(event.get("headers"))


def get_body(event: Mapping[str, Any]) -> Any:
    """
    Return the body exactly as API Gateway delivered it.

    Neither JSON parsing nor base64 decoding happens here.
    """
    body = event.get("body")
    if body is None or body == "":
        return {}
    return body


def decode_base64_body(event: Mapping[str, Any], body: Any) -> Any:
    """
    Turn an isBase64Encoded body back into UTF-8 text for a body shape.

    Bodies that are not flagged, or are not text, come back unchanged.

    Raises:
        RequestValidationError: If the body is not base64 encoded UTF-8 text
    """
    if not event.get("isBase64Encoded") or not isinstance(body, str):
        return body
    try:
        return base64.b64decode(body, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise RequestValidationError(
            [{"field": "body", "message": f"Invalid base64 body: {exc}", "type": "base64_decode"}]
        ) from exc


def get_request_part(event: Mapping[str, Any], part: str) -> Any:
    """Return the raw value of the named request part."""
    getters = {
        "path": get_path_parameters,
        "query": get_query_parameters,
        "body": get_body,
        "headers": get_headers,
    }
    return getters[part](event)


def get_authorizer_claims(event: Mapping[str, Any]) -> Optional[Any]:
    """
    Find the claims an upstream authorizer attached to the event.

    REST APIs (payload v1) put them at requestContext.authorizer.claims,
    HTTP API JWT authorizers at requestContext.authorizer.jwt.claims.

    Returns:
        Raw claims (mapping or JSON text), or None when there are none
    """
    request_context = event.get("requestContext") or {}
    if not isinstance(request_context, Mapping):
        return None
    authorizer = request_context.get("authorizer")
    if not isinstance(authorizer, Mapping):
        return None

    claims = authorizer.get("claims")
    if claims is None and isinstance(authorizer.get("jwt"), Mapping):
        claims = authorizer["jwt"].get("claims")
    return claims


def get_correlation_id(event: Mapping[str, Any], context: Any) -> Optional[str]:
    """Pick X-Request-ID from the headers, falling back to the Lambda request id."""
    headers = event.get("headers") if isinstance(event, Mapping) else None
    if isinstance(headers, Mapping):
        for name, value in headers.items():
            if isinstance(name, str) and name.lower() == "x-request-id" and value:
                return str(value)
    return getattr(context, "aws_request_id", None)
