"""CloudEvents ingestion for bank quotes."""

from .envelope import (
    STRUCTURED_CONTENT_TYPE,
    CloudEvent,
    from_binary,
    from_structured,
    is_structured,
)
from .ingestion import CloudEventIngestion

__all__ = [
    "STRUCTURED_CONTENT_TYPE",
    "CloudEvent",
    "CloudEventIngestion",
    "from_binary",
    "from_structured",
    "is_structured",
]
