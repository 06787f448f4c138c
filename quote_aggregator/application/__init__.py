"""Aggregation engine: the quote store and the service facade over it."""

from .service import (
    Accepted,
    AggregationService,
    IngestionResult,
    Rejected,
    RejectionReason,
    parse_correlation_id,
    parse_quote,
)
from .store import InMemoryQuoteStore, QuoteStore

__all__ = [
    # Service
    "AggregationService",
    "Accepted",
    "Rejected",
    "RejectionReason",
    "IngestionResult",
    "parse_correlation_id",
    "parse_quote",
    # Storage
    "QuoteStore",
    "InMemoryQuoteStore",
]
