"""Custom exceptions for tatorscout with structured error information."""

from __future__ import annotations

from typing import Any


class TatorScoutError(Exception):
    """Base exception for all tatorscout errors.

    Provides structured error information with actionable messages.
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class DecodeError(TatorScoutError):
    """Raised when an encoded trace string is malformed."""

    def __init__(
        self, reason: str, encoded: str | None = None, position: int | None = None
    ):
        if position is not None:
            message = f"Failed to decode trace point {position}: {reason}"
        else:
            message = f"Failed to decode trace: {reason}"

        details = {
            "reason": reason,
            "encoded": encoded,
            "position": position,
            "suggested_action": (
                "Check that the trace was produced by the same encoding scheme "
                "and was not truncated in transit"
            ),
        }
        super().__init__(message, details)


class ValidationError(TatorScoutError):
    """Raised when trace data breaks the point schema or trace invariants."""

    def __init__(
        self,
        reason: str,
        path: str | None = None,
        expected: Any = None,
        got: Any = None,
    ):
        if path:
            message = f"Invalid trace data at '{path}': {reason}"
        else:
            message = f"Invalid trace data: {reason}"

        details = {
            "reason": reason,
            "path": path,
            "expected": expected,
            "got": got,
        }
        super().__init__(message, details)


class ParseError(TatorScoutError):
    """Raised (or returned) when Trace.parse cannot build a trace.

    Wraps the underlying DecodeError, ValidationError or JSON syntax error
    and carries its details forward.
    """

    def __init__(self, reason: str, cause: Exception | None = None):
        message = f"Failed to parse trace: {reason}"

        details = {"reason": reason}
        if cause is not None:
            details["cause_type"] = type(cause).__name__
            details.update(getattr(cause, "details", {}))
            # keep our own reason over the cause's
            details["reason"] = reason
        details.setdefault(
            "suggested_action",
            "Send a JSON object with 'state' set to compressed, parsed or "
            "expanded and a matching 'trace' payload",
        )
        super().__init__(message, details)
        self.cause = cause


class ConfigError(TatorScoutError):
    """Configuration error."""

    pass


class SeasonNotFoundError(TatorScoutError):
    """Raised when a requested season is not registered."""

    def __init__(self, year: int, available_years: list | None = None):
        available = available_years or []
        if available:
            available_list = ", ".join(str(y) for y in available)
            message = f"Season not found: {year}. Available: {available_list}"
        else:
            message = f"Season not found: {year}"

        details = {
            "year": year,
            "available_years": available,
            "suggested_action": f"Use one of the available seasons: {available}",
        }
        super().__init__(message, details)
