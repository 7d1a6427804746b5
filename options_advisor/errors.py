"""Exceptions raised to callers of the advisor core."""

from __future__ import annotations


class AdvisorError(Exception):
    """Base class for all advisor errors."""


class ConfigError(AdvisorError, ValueError):
    """Bad or missing configuration, e.g. an unknown provider id."""


class ApiError(AdvisorError):
    """Provider call failed: transport error or non-2xx HTTP status."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"API Error: {reason}")
        self.reason = reason
        self.status_code = status_code
