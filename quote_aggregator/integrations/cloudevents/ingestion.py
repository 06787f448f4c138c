"""Ingestion adapter feeding CloudEvents into the aggregation service."""

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from ...application import AggregationService, IngestionResult
from ...context import ExecutionContext, clear_context, set_context
from ...domain import MalformedEnvelope
from .envelope import CloudEvent, from_binary, from_structured, is_structured

if TYPE_CHECKING:
    from ...config import AggregatorSettings

LOGGER = logging.getLogger(__name__)


class CloudEventIngestion:
    """Extracts the correlation id and quote from CloudEvents.

    The correlation id is read from an extension attribute (by default
    `kogitoprocinstanceid`, set by the workflow engine on every bank
    response) and the quote from the event data. Both are handed to
    `AggregationService.handle_incoming`, which performs validation.

    While an event is handled, the execution context carries its
    correlation id and event id so every log record can be traced back to
    the event.

    Attributes:
        service: The service quotes are recorded through.
        correlation_extension: Extension attribute holding the correlation id.
        accepted_event_types: Event types to accept. Empty accepts all.

    Example:
        >>> ingestion = CloudEventIngestion(service)
        >>> result = await ingestion.ingest_structured(body)
    """

    __slots__ = ("service", "correlation_extension", "accepted_event_types")

    def __init__(
        self,
        service: AggregationService,
        correlation_extension: str = "kogitoprocinstanceid",
        accepted_event_types: Iterable[str] = (),
    ):
        self.service = service
        self.correlation_extension = correlation_extension
        self.accepted_event_types = frozenset(accepted_event_types)

    @classmethod
    def from_settings(
        cls, service: AggregationService, settings: "AggregatorSettings"
    ) -> "CloudEventIngestion":
        return cls(
            service,
            correlation_extension=settings.correlation_extension,
            accepted_event_types=settings.accepted_event_types,
        )

    async def ingest(self, event: CloudEvent) -> IngestionResult:
        """Record the quote carried by a decoded CloudEvent.

        Args:
            event: The decoded event.

        Returns:
            The service's Accepted or Rejected result. Events of a type that
            is not accepted are rejected as malformed envelopes.
        """
        correlation_id = event.extension(self.correlation_extension)
        ctx = ExecutionContext(
            correlation_id=correlation_id if isinstance(correlation_id, str) else None,
            event_id=event.id,
        )
        set_context(ctx)
        try:
            if self.accepted_event_types and event.type not in self.accepted_event_types:
                return self.service.reject(
                    MalformedEnvelope(f"Unsupported event type {event.type!r}")
                )
            try:
                payload = event.payload()
            except MalformedEnvelope as e:
                return self.service.reject(e)
            LOGGER.debug(
                "Received CloudEvent",
                extra={**ctx.as_log_extra(), "event_type": event.type},
            )
            return await self.service.handle_incoming(correlation_id, payload)
        finally:
            clear_context()

    async def ingest_structured(self, body: str | bytes) -> IngestionResult:
        """Decode a structured-mode event and record its quote."""
        try:
            event = from_structured(body)
        except MalformedEnvelope as e:
            return self.service.reject(e)
        return await self.ingest(event)

    async def ingest_binary(self, headers: Mapping[str, str], body: bytes) -> IngestionResult:
        """Decode a binary-mode event and record its quote."""
        try:
            event = from_binary(headers, body)
        except MalformedEnvelope as e:
            return self.service.reject(e)
        return await self.ingest(event)

    async def ingest_http(self, headers: Mapping[str, str], body: bytes) -> IngestionResult:
        """Decode an event in whichever mode its Content-Type indicates."""
        content_type = next(
            (value for name, value in headers.items() if name.lower() == "content-type"),
            None,
        )
        if is_structured(content_type):
            return await self.ingest_structured(body)
        return await self.ingest_binary(headers, body)
