"""Structured logging for adapter invocations."""

from lambduh.logging.config import JSONFormatter, configure_logging, get_logger

__all__ = ["JSONFormatter", "configure_logging", "get_logger"]
