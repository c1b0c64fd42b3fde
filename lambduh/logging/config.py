"""JSON log lines for adapter invocations.

The adapter logs through the ``lambduh`` logger hierarchy and passes the
facts about an invocation as flat ``extra`` keys. Nothing here touches the
root logger: an application that wants JSON lines on stdout opts in with
configure_logging(), everything else keeps its own handlers.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any, Optional

from lambduh.config import settings

PACKAGE_LOGGER = "lambduh"

# Keys the adapter sets through `extra`, in output order
INVOCATION_FIELDS = (
    "correlation_id",
    "function_name",
    "method",
    "path",
    "event_keys",
    "violations",
    "status_code",
    "error",
    "exception_type",
    "response_time_ms",
)


class JSONFormatter(logging.Formatter):
    """
    Render each record as a single JSON object.

    The object always has timestamp, level, logger, service and message.
    Any INVOCATION_FIELDS present on the record follow, then the traceback
    when the record carries one. DEBUG records also name their source line.
    """

    def __init__(self, service_name: Optional[str] = None) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service_name or settings.service_name,
            "message": record.getMessage(),
        }
        for field in INVOCATION_FIELDS:
            if field in record.__dict__:
                entry[field] = record.__dict__[field]

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if record.levelno <= logging.DEBUG:
            entry["source"] = f"{record.pathname}:{record.lineno} in {record.funcName}"

        return json.dumps(entry, default=str)


class _InvocationHandler(logging.StreamHandler):
    """Stream handler marker so configure_logging() can find its own handler."""


def configure_logging(stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Print lambduh log records as JSON lines.

    A JSON handler is attached to the ``lambduh`` logger and propagation
    to the root logger stops, so each record is written once. Root handlers
    are left alone. Repeated calls reuse the same handler and only refresh
    its level and stream.

    Args:
        stream: Where to write, stdout by default

    Returns:
        The installed handler
    """
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handler = next(
        (h for h in package_logger.handlers if isinstance(h, _InvocationHandler)),
        None,
    )
    if handler is None:
        handler = _InvocationHandler(stream or sys.stdout)
        handler.setFormatter(JSONFormatter())
        package_logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(level)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the named logger; module names keep it under ``lambduh``."""
    return logging.getLogger(name)
