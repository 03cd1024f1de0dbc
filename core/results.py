# ============================================================================
# OPERATION OUTCOMES
# ============================================================================
# STATUS: Core - Explicit success/failure wrapper
# PURPOSE: Carry external call failures as values instead of exceptions
# ============================================================================
"""
Operation Outcomes

``Outcome`` wraps the result of a call into an external collaborator
(cache backend, data store). Callers inspect ``ok`` and pick a fallback
rather than relying on exceptions escaping.

Usage:
    outcome = await attempt(store.get(key))
    if not outcome.ok:
        return None
    return outcome.value
"""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of an external call: either a value or the exception raised."""
    ok: bool
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome[T]":
        return cls(ok=False, error=error)


def error_message(error: BaseException) -> Optional[str]:
    """Message of an exception, or None when it carries no text."""
    message = str(error)
    return message or None


async def attempt(awaitable: Awaitable[T]) -> Outcome[T]:
    """Await ``awaitable`` and capture its value or exception as an Outcome."""
    try:
        return Outcome.success(await awaitable)
    except Exception as e:
        return Outcome.failure(e)


__all__ = [
    "Outcome",
    "attempt",
    "error_message",
]
