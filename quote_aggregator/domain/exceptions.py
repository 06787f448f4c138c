"""Exceptions raised at the aggregation boundary."""


class AggregationError(Exception):
    """Base class for inbound events the aggregator refuses to record."""

    pass


class InvalidCorrelationId(AggregationError):
    """Raised when an event carries no usable correlation id.

    The correlation id must be a non-empty string. It is never normalized,
    so any non-empty value is acceptable.
    """

    pass


class MalformedQuote(AggregationError):
    """Raised when a payload does not decode into a valid BankQuote.

    This covers undecodable bodies, a missing or empty issuer, and a rate
    that is missing, non-numeric, NaN or infinite.
    """

    pass


class MalformedEnvelope(AggregationError):
    """Raised when the transport envelope around a quote cannot be decoded."""

    pass
