"""Rendering of handler results and failures into response bodies."""

import dataclasses
import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from lambduh.exceptions import HttpError


def _json_default(obj: Any) -> Any:
    """Fallback encoder for values the json module does not know."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, HttpError):
        return obj.to_dict()
    if isinstance(obj, BaseException):
        return {"error": type(obj).__name__, "message": str(obj)}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, Decimal):
        if not obj.is_finite():
            return str(obj)
        if obj == obj.to_integral_value():
            return int(obj)
        return float(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    return str(obj)


def convert_to_string(data: Any) -> str:
    """
    Render a response value as transmittable text.

    Strings pass through unchanged; everything else is rendered as JSON.

    Args:
        data: Handler result or failure payload

    Returns:
        Response body text
    """
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, default=_json_default)
    except (TypeError, ValueError):
        # Circular references and non-string dict keys land here
        return json.dumps(str(data))


def build_response(status_code: int, data: Any) -> dict[str, Any]:
    """
    Build the proxy integration response envelope.

    Args:
        status_code: HTTP status code
        data: Value to render as the body

    Returns:
        Dict with statusCode and body
    """
    return {"statusCode": status_code, "body": convert_to_string(data)}
