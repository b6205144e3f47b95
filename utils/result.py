"""Tagged success/failure values returned by the lifecycle engine and services.

Every failure carries an ``error_type`` the HTTP layer maps to a status code;
a failed operation never leaves a partially mutated record behind.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorType:
    """Failure categories."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"
    VALIDATION = "VALIDATION"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an engine or service operation.

    Usage:
        result = lifecycle.review(state, clock=clock)
        if not result:
            log(result.error_type, result.error)
        else:
            persist(result.value)
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, value: T = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: str, **details: Any) -> "Result[T]":
        return cls(success=False, error=error, error_type=error_type, details=details)

    def __bool__(self) -> bool:
        return self.success
