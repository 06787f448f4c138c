"""Quote Aggregator - correlation-based aggregation of bank quotes.

This module provides the public API for recording quotes per workflow
instance and reading back everything received so far.
"""

from .application import (
    Accepted,
    AggregationService,
    InMemoryQuoteStore,
    QuoteStore,
    Rejected,
    RejectionReason,
)
from .config import AggregatorSettings
from .domain import (
    AggregationError,
    BankQuote,
    CorrelationId,
    InvalidCorrelationId,
    MalformedEnvelope,
    MalformedQuote,
)

__all__ = [
    # Service
    "AggregationService",
    "Accepted",
    "Rejected",
    "RejectionReason",
    # Storage
    "QuoteStore",
    "InMemoryQuoteStore",
    # Configuration
    "AggregatorSettings",
    # Domain primitives
    "BankQuote",
    "CorrelationId",
    # Errors
    "AggregationError",
    "InvalidCorrelationId",
    "MalformedEnvelope",
    "MalformedQuote",
]
