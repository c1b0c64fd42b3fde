"""Shared fixtures for adapter tests."""

import logging
from types import SimpleNamespace
from typing import Any, Callable, Optional

import pytest

from lambduh.config import settings

VALID_SUB = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture(autouse=True)
def no_root_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep adapters from installing the JSON log handler during tests."""
    monkeypatch.setattr(settings, "configure_logging", False)


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    """Minimal stand-in for the Lambda context object."""
    return SimpleNamespace(
        aws_request_id="req-0001",
        function_name="widgets-api",
        memory_limit_in_mb=128,
    )


@pytest.fixture
def raw_claims() -> dict[str, Any]:
    """Claims as a Cognito user pool authorizer delivers them."""
    return {
        "email": "user@example.com",
        "sub": VALID_SUB,
        "cognito:username": "user",
        "iat": "Mon Oct 21 19:17:36 UTC 2019",
        "token_use": "id",
    }


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """Factory for REST API proxy events."""

    def _make_event(
        path: Optional[dict[str, str]] = None,
        query: Optional[dict[str, str]] = None,
        body: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        claims: Any = None,
    ) -> dict[str, Any]:
        request_context: dict[str, Any] = {"requestId": "api-req-1", "stage": "v1"}
        if claims is not None:
            request_context["authorizer"] = {"claims": claims}
        return {
            "httpMethod": "GET",
            "path": "/widgets",
            "pathParameters": path,
            "queryStringParameters": query,
            "body": body,
            "headers": headers,
            "isBase64Encoded": False,
            "requestContext": request_context,
        }

    return _make_event


@pytest.fixture
def restore_lambduh_logger():
    """Put the lambduh package logger back the way the test found it."""
    package_logger = logging.getLogger("lambduh")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield package_logger
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
