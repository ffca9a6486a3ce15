"""Reference-data cache with request coalescing.

Fronts slow-changing catalog data (bouquets, collection names).  A key is
fetched at most once at a time: callers that arrive while a fetch is running
await that same fetch.  Successful results live for a fixed TTL measured from
completion; failures are never cached and leave the key absent so the next
caller retries from scratch.

The cache is a plain object handed to whoever needs it, so tests can build
isolated instances and drive the clock.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from florist.application.reference_data import ReferenceCache

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 5 * 60.0
DEFAULT_COALESCE_GRACE_SECONDS = 0.1


class FetchCancelled(Exception):
    """The caller's cancel signal fired before the fetch finished."""


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    data: T
    timestamp: float
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now <= self.expires_at


@dataclass
class _InFlight:
    task: asyncio.Future | None = None
    waiters: int = 0
    completed_at: float | None = None


class ReferenceDataCache(ReferenceCache):
    """TTL cache keyed by resource name, deduplicating concurrent fetches.

    Args:
        ttl_seconds: Lifetime of a successful fetch result.
        coalesce_grace_seconds: How long a finished fetch stays joinable.
        serve_stale: Return an expired value immediately while a background
            refresh runs, instead of making the caller wait.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        coalesce_grace_seconds: float = DEFAULT_COALESCE_GRACE_SECONDS,
        serve_stale: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._grace = coalesce_grace_seconds
        self._serve_stale = serve_stale
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._in_flight: dict[str, _InFlight] = {}

    # --- Public API -----------------------------------------------------------

    async def get(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[T]],
        cancel: asyncio.Event | None = None,
    ) -> T:
        """Return the cached value for ``key``, fetching it if needed.

        ``cancel`` lets this caller stop waiting.  The shared fetch itself is
        only aborted once no caller is waiting on it any more.

        Raises:
            FetchCancelled: ``cancel`` was set before the fetch finished.
            Exception: whatever ``fetcher`` raised, for every coalesced caller.
        """
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None:
            if entry.is_valid(now):
                logger.debug("Cache hit for %r", key)
                return entry.data
            if self._serve_stale:
                logger.debug("Serving stale %r while revalidating", key)
                self._revalidate(key, fetcher, now)
                return entry.data
            del self._entries[key]
            logger.debug("Cache entry for %r expired", key)

        flight = self._live_flight(key, now)
        if flight is None:
            logger.debug("Cache miss for %r, fetching", key)
            flight = self._start(key, fetcher)
        else:
            logger.debug("Joining in-flight fetch for %r", key)
        return await self._wait(key, flight, cancel)

    def invalidate(self, key: str) -> None:
        """Drop one key.  A fetch already running for it will not write back."""
        self._entries.pop(key, None)
        self._in_flight.pop(key, None)
        logger.debug("Invalidated %r", key)

    def clear(self) -> None:
        """Drop every entry and every in-flight marker."""
        self._entries.clear()
        self._in_flight.clear()
        logger.debug("Cache cleared")

    def entry(self, key: str) -> CacheEntry[Any] | None:
        """Return the raw entry for ``key`` without fetching or evicting."""
        return self._entries.get(key)

    # --- Internal helpers -----------------------------------------------------

    def _live_flight(self, key: str, now: float) -> _InFlight | None:
        flight = self._in_flight.get(key)
        if flight is None:
            return None
        if flight.completed_at is not None and now - flight.completed_at > self._grace:
            del self._in_flight[key]
            return None
        return flight

    def _start(self, key: str, fetcher: Callable[[], Awaitable[T]]) -> _InFlight:
        flight = _InFlight()
        flight.task = asyncio.ensure_future(self._run(key, fetcher, flight))
        self._in_flight[key] = flight
        return flight

    def _revalidate(self, key: str, fetcher: Callable[[], Awaitable[T]], now: float) -> None:
        if self._live_flight(key, now) is not None:
            return
        flight = self._start(key, fetcher)
        # Nobody awaits a background refresh; _run already logged any failure.
        flight.task.add_done_callback(
            lambda task: task.cancelled() or task.exception()
        )

    def _forget(self, key: str, flight: _InFlight) -> None:
        if self._in_flight.get(key) is flight:
            del self._in_flight[key]

    async def _run(
        self, key: str, fetcher: Callable[[], Awaitable[T]], flight: _InFlight
    ) -> T:
        try:
            data = await fetcher()
        except asyncio.CancelledError:
            self._forget(key, flight)
            logger.debug("Fetch for %r aborted", key)
            raise
        except Exception as exc:
            self._forget(key, flight)
            logger.warning("Fetch for %r failed: %s", key, exc)
            raise

        now = self._clock()
        # Only the current flight may populate; invalidate()/clear() detach it.
        if self._in_flight.get(key) is flight:
            self._entries[key] = CacheEntry(data=data, timestamp=now, expires_at=now + self._ttl)
            flight.completed_at = now
        return data

    async def _wait(
        self, key: str, flight: _InFlight, cancel: asyncio.Event | None
    ) -> Any:
        task = flight.task
        flight.waiters += 1
        try:
            if cancel is None:
                return await asyncio.shield(task)

            cancelled = asyncio.ensure_future(cancel.wait())
            try:
                await asyncio.wait({task, cancelled}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                cancelled.cancel()
            if not task.done():
                raise FetchCancelled(f"Fetch for {key!r} cancelled by caller")
            return task.result()
        finally:
            flight.waiters -= 1
            if flight.waiters == 0 and not task.done():
                logger.debug("No callers left waiting on %r, aborting fetch", key)
                self._forget(key, flight)
                task.cancel()
