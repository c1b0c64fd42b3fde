"""Data models for decoded requests."""

from lambduh.models.claims import Claims, parse_date_string

__all__ = ["Claims", "parse_date_string"]
