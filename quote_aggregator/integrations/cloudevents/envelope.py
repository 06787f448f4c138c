"""CloudEvents v1.0 envelope decoding.

Supports the two HTTP content modes quote producers use:
- Structured mode: the whole event is a JSON document
  (`application/cloudevents+json`)
- Binary mode: attributes travel as `ce-*` headers and the body is the data
"""

import base64
import binascii
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...domain import MalformedEnvelope

STRUCTURED_CONTENT_TYPE = "application/cloudevents+json"
BINARY_HEADER_PREFIX = "ce-"


class CloudEvent(BaseModel):
    """A CloudEvents v1.0 event.

    Context attributes defined by the CloudEvents specification are declared
    fields. Any other top-level attribute is an extension and is kept as an
    extra field, available through `extension()`.

    Attributes:
        specversion: CloudEvents version; only "1.0" is accepted.
        id: Event id, unique per source.
        source: URI reference identifying the producer.
        type: Event type, e.g. "kogito.serverless.loanbroker.bank.offer".
        datacontenttype: Media type of `data`.
        data: The event payload, already decoded from JSON when the event
            arrived in structured mode.
        data_base64: Base64 encoded binary payload (structured mode only).

    Example:
        >>> event = CloudEvent.model_validate({
        ...     "specversion": "1.0",
        ...     "id": "123456",
        ...     "source": "/local/tests",
        ...     "type": "kogito.serverless.loanbroker.bank.offer",
        ...     "kogitoprocinstanceid": "123",
        ...     "data": {"issuer": "BankPremium", "rate": 4.6556},
        ... })
        >>> event.extension("kogitoprocinstanceid")
        '123'
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    specversion: Literal["1.0"]
    id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    type: str = Field(min_length=1)
    datacontenttype: str | None = None
    dataschema: str | None = None
    subject: str | None = None
    time: str | None = None
    data: Any = None
    data_base64: str | None = None

    @property
    def extensions(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def extension(self, name: str) -> Any:
        """Return an extension attribute, or None when absent."""
        return self.extensions.get(name.lower())

    def payload(self) -> Any:
        """Return the event data, decoding `data_base64` when present.

        Raises:
            MalformedEnvelope: If `data_base64` is not valid base64.
        """
        if self.data_base64 is None:
            return self.data
        try:
            return base64.b64decode(self.data_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedEnvelope(f"Invalid data_base64: {e}") from e


def from_structured(body: str | bytes) -> CloudEvent:
    """Decode a structured-mode CloudEvent from its JSON representation.

    Raises:
        MalformedEnvelope: If the body is not JSON or lacks required attributes.
    """
    try:
        return CloudEvent.model_validate_json(body)
    except ValidationError as e:
        raise MalformedEnvelope(_describe(e)) from e


def from_binary(headers: Mapping[str, str], body: bytes) -> CloudEvent:
    """Decode a binary-mode CloudEvent from HTTP headers and body.

    Every `ce-<name>` header becomes the `<name>` attribute, and the
    Content-Type header becomes `datacontenttype`. The body is kept
    undecoded as the event data.

    Raises:
        MalformedEnvelope: If required attributes are missing.
    """
    attributes: dict[str, Any] = {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered.startswith(BINARY_HEADER_PREFIX):
            attributes[lowered[len(BINARY_HEADER_PREFIX) :]] = value
        elif lowered == "content-type":
            attributes["datacontenttype"] = value
    attributes["data"] = body or None
    try:
        return CloudEvent.model_validate(attributes)
    except ValidationError as e:
        raise MalformedEnvelope(_describe(e)) from e


def is_structured(content_type: str | None) -> bool:
    """Whether a Content-Type header denotes a structured-mode event."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() == STRUCTURED_CONTENT_TYPE


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in item["loc"]) or "event"
        problems.append(f"{location}: {item['msg']}")
    return "Invalid CloudEvent (" + "; ".join(problems) + ")"
