"""
Outcome - value-or-error wrapper for best-effort calls.

Enrichment steps (live context, search summaries) must never fail the
request they decorate. They run through ``attempt`` and the caller
states the fallback explicitly with ``unwrap_or``.
"""
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from acns.core.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default


async def attempt(awaitable: Awaitable[T], label: str) -> Outcome[T]:
    """
    Await ``awaitable`` and capture any exception as an Outcome.

    The failure is logged under ``label``; cancellation is not captured.
    """
    try:
        return Outcome(value=await awaitable)
    except Exception as e:
        logger.error(f"{label} failed: {e}")
        return Outcome(error=e)
