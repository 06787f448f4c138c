"""Service configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings


class AggregatorSettings(BaseSettings):
    """Runtime configuration for the quote aggregator.

    All settings can be configured via environment variables with the
    AGGREGATOR_ prefix. For example:
    - AGGREGATOR_CORRELATION_EXTENSION=kogitoprocinstanceid
    - AGGREGATOR_ENABLE_MAINTENANCE=true
    - AGGREGATOR_ACCEPTED_EVENT_TYPES='["kogito.serverless.loanbroker.bank.offer"]'

    Attributes:
        correlation_extension: Name of the CloudEvents extension attribute
            holding the workflow instance id.
        accepted_event_types: Event types accepted by the ingestion adapter.
            An empty list accepts every type.
        enable_maintenance: Whether the reset endpoint is exposed. Must stay
            off wherever untrusted callers can reach the service.
        log_level: Level used for accepted-quote log records and for the
            logging configuration of the served application.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.

    Example:
        >>> settings = AggregatorSettings(enable_maintenance=True)
        >>> service = AggregationService.from_settings(settings)
        >>> app = create_app(service, settings)
    """

    correlation_extension: str = Field(
        default="kogitoprocinstanceid",
        min_length=1,
        description="CloudEvents extension attribute carrying the correlation id",
    )
    accepted_event_types: list[str] = Field(
        default_factory=list,
        description="Accepted CloudEvents types (empty accepts all)",
    )
    enable_maintenance: bool = Field(
        default=False,
        description="Expose the maintenance reset endpoint",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="HTTP port")

    model_config = {"env_prefix": "AGGREGATOR_"}
