"""Quote storage keyed by correlation id.

This module provides:
- QuoteStore: Abstract interface for accumulating quotes per correlation id
- InMemoryQuoteStore: Process-local implementation with per-bucket locking
"""

import threading
from abc import ABC, abstractmethod

from ..domain import BankQuote


class QuoteStore(ABC):
    """Abstract storage for quotes grouped by correlation id.

    A store owns every piece of synchronization needed to accumulate quotes.
    Callers never lock anything themselves. All operations are async so that
    the service does not care whether a backend is in-process or remote.

    The store performs no validation: correlation ids are assumed to be
    non-empty strings and quotes to be valid BankQuote instances. Rejecting
    bad input is the job of the AggregationService.
    """

    @staticmethod
    def in_memory() -> "QuoteStore":
        return InMemoryQuoteStore()

    @abstractmethod
    async def record(self, correlation_id: str, quote: BankQuote) -> None:
        """Append a quote to the bucket for a correlation id.

        The bucket is created on the first record for an id. Concurrent
        records for the same id must all be retained.

        Args:
            correlation_id: Opaque id of the workflow instance.
            quote: The quote to append.
        """
        ...

    @abstractmethod
    async def query(self, correlation_id: str) -> list[BankQuote]:
        """Return a snapshot of the quotes recorded for a correlation id.

        Args:
            correlation_id: Opaque id of the workflow instance.

        Returns:
            A new list owned by the caller. Empty if nothing was recorded
            for the id. Ordering is unspecified.
        """
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Remove every correlation id and its quotes."""
        ...

    @abstractmethod
    async def count(self, correlation_id: str) -> int:
        """Return the number of quotes recorded for a correlation id."""
        ...

    @abstractmethod
    async def correlation_ids(self) -> list[str]:
        """Return the correlation ids that currently have a bucket."""
        ...


class _Bucket:
    """Quotes for a single correlation id, guarded by their own lock."""

    __slots__ = ("lock", "quotes")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.quotes: list[BankQuote] = []


class InMemoryQuoteStore(QuoteStore):
    """In-memory quote store with per-correlation-id locking.

    Synchronization happens at two levels:

    1. **Bucket creation**: the first record for an id creates its bucket
       with an atomic get-or-create under a short-lived map lock. Two
       first-writers racing on the same new id always end up sharing one
       bucket. Buckets are fully constructed before they are published, so
       readers never see a partial one.
    2. **Bucket mutation**: appends and snapshots take only the lock of the
       bucket involved. Writers for different ids never wait on each other
       once their buckets exist.

    The locks are thread locks, held only around list operations, so the
    store is safe both for many tasks on one event loop and for callers on
    several threads.

    Note:
        Quotes are lost on restart. The store lives for the lifetime of the
        object that owns it, typically one AggregationService.

    Example:
        >>> store = InMemoryQuoteStore()
        >>> await store.record("123", BankQuote(issuer="BankPremium", rate=4.6556))
        >>> await store.query("123")
        [BankQuote(issuer='BankPremium', rate=4.6556)]
        >>> await store.query("999")
        []
    """

    __slots__ = ("_buckets", "_buckets_lock")

    def __init__(self) -> None:
        self._buckets: dict[str, _Bucket] = {}
        self._buckets_lock = threading.Lock()

    def _get_or_create_bucket(self, correlation_id: str) -> _Bucket:
        bucket = self._buckets.get(correlation_id)
        if bucket is not None:
            return bucket
        with self._buckets_lock:
            return self._buckets.setdefault(correlation_id, _Bucket())

    async def record(self, correlation_id: str, quote: BankQuote) -> None:
        bucket = self._get_or_create_bucket(correlation_id)
        with bucket.lock:
            bucket.quotes.append(quote)

    async def query(self, correlation_id: str) -> list[BankQuote]:
        bucket = self._buckets.get(correlation_id)
        if bucket is None:
            return []
        with bucket.lock:
            return list(bucket.quotes)

    async def clear(self) -> None:
        # A record racing with clear lands either in the discarded map or the
        # new one; both orderings are valid linearizations.
        with self._buckets_lock:
            self._buckets = {}

    async def count(self, correlation_id: str) -> int:
        bucket = self._buckets.get(correlation_id)
        if bucket is None:
            return 0
        with bucket.lock:
            return len(bucket.quotes)

    async def correlation_ids(self) -> list[str]:
        with self._buckets_lock:
            return list(self._buckets)
