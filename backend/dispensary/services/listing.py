"""
Tagged result shared by every lister.

A lister never raises on a store failure: it returns a ListingResult carrying
either the success payload or a generic, client-safe error message. The
underlying exception is logged once here and never leaves the service layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from dispensary.core.logging import get_logger

__all__ = ["ListingResult", "run_listing"]

T = TypeVar("T")

log = get_logger(__name__)


@dataclass(frozen=True)
class ListingResult(Generic[T]):
    payload: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, payload: T) -> "ListingResult[T]":
        return cls(payload=payload)

    @classmethod
    def failure(cls, message: str) -> "ListingResult[T]":
        return cls(error=message)


def run_listing(listing: str, query: Callable[[], T], error_message: str) -> ListingResult[T]:
    """
    Run `query` once. Any exception is logged with `listing` as context and
    turned into a failure carrying `error_message`. No retries.
    """
    try:
        payload = query()
    except Exception:
        log.exception("store query failed", extra={"listing": listing})
        return ListingResult.failure(error_message)
    return ListingResult.success(payload)
