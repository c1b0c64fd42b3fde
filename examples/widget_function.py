"""
Sample Lambda function built on lambduh.

Deploy behind API Gateway with a Cognito user pool authorizer and point
the function handler at ``widget_function.get_widget_handler`` or
``widget_function.create_widget_handler``.

Requirements:
    pip install lambduh
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

from lambduh import (
    AdapterOptions,
    InvalidFormatError,
    NotFoundError,
    Request,
    adapt_with,
)

# Stand-in for a real table
WIDGETS: Dict[str, Dict[str, Any]] = {
    "42": {"widget_id": "42", "name": "gear", "size": 3, "owner": "user"},
}


class WidgetPath(BaseModel):
    """Path parameters for /widgets/{widget_id}."""

    widget_id: str = Field(..., min_length=1, max_length=64)


class CreateWidgetBody(BaseModel):
    """
    Request body for creating a widget.

    Attributes:
        name: Display name (1-255 chars)
        size: Size in millimetres
    """

    name: str = Field(..., min_length=1, max_length=255)
    size: int = Field(..., gt=0)


async def get_widget(request: Request, event: dict, context: Any) -> Dict[str, Any]:
    """Return one widget owned by the caller."""
    widget = WIDGETS.get(request.path.widget_id)
    if widget is None or widget["owner"] != request.claims.username:
        raise NotFoundError("Widget", request.path.widget_id)
    return widget


async def create_widget(request: Request, event: dict, context: Any) -> Dict[str, Any]:
    """Store a new widget for the caller."""
    if request.body.name in {w["name"] for w in WIDGETS.values()}:
        raise InvalidFormatError(
            [{"field": "body.name", "message": "Name already taken", "type": "unique"}]
        )

    widget_id = str(len(WIDGETS) + 1)
    widget = {
        "widget_id": widget_id,
        "name": request.body.name,
        "size": request.body.size,
        "owner": request.claims.username,
    }
    WIDGETS[widget_id] = widget
    return widget


get_widget_handler = adapt_with(
    AdapterOptions(path_type=WidgetPath, claims_required=True), get_widget
)

create_widget_handler = adapt_with(
    AdapterOptions(body_type=CreateWidgetBody, claims_required=True), create_widget
)
