"""Domain primitives for quote aggregation.

- BankQuote: Immutable quote value (issuer and rate)
- CorrelationId: Opaque token grouping quotes of one workflow instance
- AggregationError: Base exception for refused inbound events
"""

from .exceptions import (
    AggregationError,
    InvalidCorrelationId,
    MalformedEnvelope,
    MalformedQuote,
)
from .quote import BankQuote

CorrelationId = str

__all__ = [
    "BankQuote",
    "CorrelationId",
    "AggregationError",
    "InvalidCorrelationId",
    "MalformedEnvelope",
    "MalformedQuote",
]
