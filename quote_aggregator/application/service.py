"""Aggregation service bridging inbound events and the quote store."""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from ulid import ULID

from ..context import get_context
from ..domain import (
    AggregationError,
    BankQuote,
    InvalidCorrelationId,
    MalformedEnvelope,
    MalformedQuote,
)
from .store import QuoteStore

if TYPE_CHECKING:
    from ..config import AggregatorSettings

LOGGER = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    INVALID_CORRELATION_ID = "invalid_correlation_id"
    MALFORMED_QUOTE = "malformed_quote"
    MALFORMED_ENVELOPE = "malformed_envelope"


_REASONS: dict[type[AggregationError], RejectionReason] = {
    InvalidCorrelationId: RejectionReason.INVALID_CORRELATION_ID,
    MalformedQuote: RejectionReason.MALFORMED_QUOTE,
    MalformedEnvelope: RejectionReason.MALFORMED_ENVELOPE,
}


class Accepted(BaseModel):
    """Outcome of an inbound quote that was recorded.

    Attributes:
        receipt_id: Unique identifier assigned to this arrival.
        correlation_id: The workflow instance the quote was recorded under.
        quote: The recorded quote.
    """

    model_config = ConfigDict(frozen=True)

    receipt_id: ULID = Field(default_factory=ULID)
    correlation_id: str
    quote: BankQuote


class Rejected(BaseModel):
    """Outcome of an inbound quote that was refused without touching the store.

    Attributes:
        reason: Category of the rejection.
        detail: Human readable explanation for the producer.
    """

    model_config = ConfigDict(frozen=True)

    reason: RejectionReason
    detail: str

    @classmethod
    def from_error(cls, error: AggregationError) -> "Rejected":
        for error_type, reason in _REASONS.items():
            if isinstance(error, error_type):
                return cls(reason=reason, detail=str(error))
        raise TypeError(f"No rejection reason for {type(error).__name__}")


IngestionResult = Accepted | Rejected


def parse_correlation_id(value: Any) -> str:
    """Check that a correlation id is a non-empty string.

    The id is returned unchanged: no trimming or case folding is applied.

    Raises:
        InvalidCorrelationId: If the value is missing, not a string, or empty.
    """
    if value is None:
        raise InvalidCorrelationId("Correlation id is missing")
    if not isinstance(value, str):
        raise InvalidCorrelationId(
            f"Correlation id must be a string, got {type(value).__name__}"
        )
    if not value:
        raise InvalidCorrelationId("Correlation id is empty")
    return value


def parse_quote(raw_payload: Any) -> BankQuote:
    """Decode a raw payload into a BankQuote.

    Args:
        raw_payload: A BankQuote, a mapping with `issuer` and `rate`, or the
            JSON encoding of such a mapping as str or bytes.

    Returns:
        The decoded quote.

    Raises:
        MalformedQuote: If the payload cannot be decoded or fails validation.
    """
    if isinstance(raw_payload, BankQuote):
        return raw_payload
    try:
        if isinstance(raw_payload, (str, bytes, bytearray)):
            return BankQuote.model_validate_json(raw_payload)
        if isinstance(raw_payload, Mapping):
            return BankQuote.model_validate(dict(raw_payload))
    except ValidationError as e:
        raise MalformedQuote(_describe_validation_error(e)) from e
    raise MalformedQuote(
        f"Quote payload must be an object, got {type(raw_payload).__name__}"
    )


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in item["loc"]) or "payload"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid quote (" + "; ".join(problems) + ")"


class AggregationService:
    """Facade over a QuoteStore for inbound quotes and quote queries.

    The service is the only component that mutates its store. Inbound
    events are validated here, so the store only ever sees well-formed
    correlation ids and quotes.

    Attributes:
        store: The store that owns the quote buckets.
        level: The numeric logging level for accepted quotes.

    Examples:
        >>> service = AggregationService(QuoteStore.in_memory())
        >>> result = await service.handle_incoming(
        ...     "123", {"issuer": "BankStar", "rate": 5.4342645}
        ... )
        >>> isinstance(result, Accepted)
        True
        >>> await service.list_quotes("123")
        [BankQuote(issuer='BankStar', rate=5.4342645)]

        Rejections leave the store untouched:

        >>> result = await service.handle_incoming("", {"issuer": "BankStar", "rate": 5.0})
        >>> result.reason
        <RejectionReason.INVALID_CORRELATION_ID: 'invalid_correlation_id'>
    """

    __slots__ = ("store", "level")

    def __init__(self, store: QuoteStore, level: str = "INFO"):
        """Initialize the service.

        Args:
            store: The store to record quotes into. Owned by this service.
            level: String representation of the log level used for accepted
                quotes (e.g., "INFO", "DEBUG"). Case-insensitive.
        """
        self.store = store
        self.level = getattr(logging, level.upper())

    @classmethod
    def from_settings(cls, settings: "AggregatorSettings") -> "AggregationService":
        """Create a service backed by a fresh in-memory store."""
        return cls(QuoteStore.in_memory(), level=settings.log_level)

    async def handle_incoming(self, correlation_id: Any, raw_payload: Any) -> IngestionResult:
        """Validate an inbound quote and record it.

        Args:
            correlation_id: The workflow instance id supplied by the producer.
            raw_payload: The quote body (see `parse_quote`).

        Returns:
            Accepted when the quote was recorded, otherwise Rejected with the
            reason. Validation failures are never raised.
        """
        try:
            valid_id = parse_correlation_id(correlation_id)
            quote = parse_quote(raw_payload)
        except AggregationError as e:
            return self.reject(e)

        await self.store.record(valid_id, quote)
        LOGGER.log(
            self.level,
            "Recorded quote",
            extra={
                **get_context().as_log_extra(),
                "correlation_id": valid_id,
                "issuer": quote.issuer,
            },
        )
        return Accepted(correlation_id=valid_id, quote=quote)

    def reject(self, error: AggregationError) -> Rejected:
        """Log and convert a boundary error into a Rejected result."""
        rejected = Rejected.from_error(error)
        LOGGER.warning(
            "Rejected quote",
            extra={**get_context().as_log_extra(), "reason": rejected.reason.value},
        )
        return rejected

    async def record(self, correlation_id: str, quote: BankQuote) -> None:
        """Record an already decoded quote.

        Raises:
            InvalidCorrelationId: If the correlation id is missing or empty.
        """
        await self.store.record(parse_correlation_id(correlation_id), quote)

    async def list_quotes(self, correlation_id: str) -> list[BankQuote]:
        """Return the quotes recorded so far for a correlation id.

        Unknown ids yield an empty list; this never fails.
        """
        return await self.store.query(correlation_id)

    async def reset(self) -> None:
        """Drop every recorded quote. Intended for tests and maintenance."""
        ids = await self.store.correlation_ids()
        await self.store.clear()
        LOGGER.info("Cleared quote store", extra={"cleared_ids": len(ids)})
