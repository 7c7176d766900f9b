"""
Report cache for Circuit Insight.

Uses diskcache as the entry store. Every read unpickles a fresh copy, so a
caller mutating a returned report never changes what the cache holds.
"""

import copy
import hashlib
import shutil
import sqlite3
import tempfile
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from diskcache import Cache, Timeout

from .exceptions import ComputeInFlightError
from .logging_config import get_logger
from .models import ComplexityReport

logger = get_logger(__name__)

_STORE_ERRORS = (OSError, sqlite3.Error, Timeout)


def content_hash(source_code: str) -> str:
    """
    Fast content fingerprint used as the cache key.

    Whitespace-sensitive; only collisions between unrelated sources matter.
    """
    return hashlib.sha256(source_code.encode()).hexdigest()[:16]


@dataclass
class CacheEntry:
    source_hash: str
    report: ComplexityReport
    cached_at: float


class ReportCache:
    """
    TTL-based memo of complexity reports keyed by source hash.

    Features:
    - Insert-on-miss, evict-on-expiry, explicit clear()
    - Bounded history of computed reports for run-to-run comparison
    - In-flight guard against recomputing the same hash twice at once
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        history_depth: int = 10,
        directory: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize cache.

        Args:
            ttl_seconds: Age after which an entry counts as a miss
            history_depth: Number of computed reports retained for deltas
            directory: Storage directory (a private temp dir when omitted,
                removed again by close())
            clock: Time source in seconds, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._owns_directory = directory is None
        self.directory = directory or tempfile.mkdtemp(prefix="circuit-insight-")
        self._store = Cache(self.directory)
        self._history: deque[ComplexityReport] = deque(maxlen=history_depth)
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()
        self._closed = False
        logger.debug(f"Report cache at {self.directory} with TTL={ttl_seconds}s")

    def __enter__(self) -> "ReportCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def history(self) -> list[ComplexityReport]:
        """Retained reports, oldest first."""
        return list(self._history)

    @property
    def history_depth(self) -> int:
        return self._history.maxlen or 0

    def previous_pair(self) -> Optional[tuple[ComplexityReport, ComplexityReport]]:
        """The two most recent retained reports as (previous, latest), if any."""
        if len(self._history) < 2:
            return None
        return self._history[-2], self._history[-1]

    def reconfigure(self, ttl_seconds: float, history_depth: int) -> None:
        """Apply new limits; the newest history entries are kept."""
        self.ttl_seconds = ttl_seconds
        if history_depth != self.history_depth:
            self._history = deque(self._history, maxlen=history_depth)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return (self._clock() - entry.cached_at) < self.ttl_seconds

    def get(self, source_hash: str) -> Optional[ComplexityReport]:
        """
        Get a cached report.

        Returns:
            A copy of the cached report, or None if absent, expired or
            stored under a different hash
        """
        try:
            entry = self._store.get(source_hash)
        except _STORE_ERRORS as e:
            logger.warning(f"Cache get failed: {e}")
            return None

        if entry is None:
            return None

        if not isinstance(entry, CacheEntry) or entry.source_hash != source_hash or not self._is_fresh(entry):
            logger.debug(f"Cache entry invalid or expired: {source_hash}")
            self._evict(source_hash)
            return None

        logger.debug(f"Cache hit: {source_hash}")
        return entry.report

    def put(self, source_hash: str, report: ComplexityReport) -> None:
        """
        Store a report and append it to the comparison history.

        The store also expires the entry on its own after ``ttl_seconds``, and
        each put sweeps entries of other sources that have outlived theirs.
        """
        entry = CacheEntry(source_hash=source_hash, report=report, cached_at=self._clock())
        try:
            removed = self._store.expire()
            if removed:
                logger.debug(f"Cache swept {removed} expired entries")
            self._store.set(source_hash, entry, expire=self.ttl_seconds)
            logger.debug(f"Cache set: {source_hash}")
        except _STORE_ERRORS as e:
            logger.warning(f"Cache set failed: {e}")

        self._history.append(copy.deepcopy(report))

    def get_or_compute(
        self, source_hash: str, compute: Callable[[], ComplexityReport]
    ) -> ComplexityReport:
        """
        Return the cached report for ``source_hash`` or compute and store it.

        Raises:
            ComputeInFlightError: If a computation for the same hash has
                not finished yet
        """
        cached = self.get(source_hash)
        if cached is not None:
            return cached

        with self._lock:
            if source_hash in self._in_flight:
                raise ComputeInFlightError(source_hash)
            self._in_flight.add(source_hash)

        try:
            logger.debug(f"Cache miss: {source_hash}")
            report = compute()
            self.put(source_hash, report)
            return report
        finally:
            with self._lock:
                self._in_flight.discard(source_hash)

    def is_in_flight(self, source_hash: str) -> bool:
        with self._lock:
            return source_hash in self._in_flight

    def _evict(self, source_hash: str) -> None:
        try:
            self._store.delete(source_hash)
        except _STORE_ERRORS as e:
            logger.warning(f"Cache evict failed: {e}")

    def invalidate(self) -> None:
        """Drop all entries; the comparison history is kept."""
        try:
            self._store.clear()
        except _STORE_ERRORS as e:
            logger.warning(f"Cache clear failed: {e}")

    def clear(self) -> None:
        """Drop all entries and the comparison history."""
        self.invalidate()
        self._history.clear()
        logger.info("Report cache cleared")

    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        try:
            entries = len(self._store)
        except _STORE_ERRORS as e:
            logger.warning(f"Cache stats failed: {e}")
            return {"directory": self.directory, "error": str(e)}

        return {
            "directory": self.directory,
            "entries": entries,
            "history": len(self._history),
            "history_depth": self.history_depth,
            "ttl_seconds": self.ttl_seconds,
        }

    def close(self) -> None:
        """Close the store; a private temp directory is deleted."""
        if self._closed:
            return
        self._closed = True
        self._store.close()
        if self._owns_directory:
            shutil.rmtree(self.directory, ignore_errors=True)
