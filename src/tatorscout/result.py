"""Explicit success/failure container for fallible entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import TatorScoutError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation on untrusted input.

    Exactly one of ``value`` and ``error`` is set. Callers check ``ok``
    (or truthiness) before reading ``value``, or call ``unwrap()`` to get
    the value or raise the stored error.
    """

    value: T | None = None
    error: TatorScoutError | None = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("Result needs exactly one of value or error")

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: TatorScoutError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
