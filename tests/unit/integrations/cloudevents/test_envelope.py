"""Tests for CloudEvents envelope decoding."""

import base64
import json

import pytest
from pydantic import ValidationError

from quote_aggregator.domain import MalformedEnvelope
from quote_aggregator.integrations.cloudevents import (
    CloudEvent,
    from_binary,
    from_structured,
    is_structured,
)

OFFER_TYPE = "kogito.serverless.loanbroker.bank.offer"


def structured_event(**overrides) -> dict:
    event = {
        "specversion": "1.0",
        "id": "123456",
        "source": "/local/tests",
        "type": OFFER_TYPE,
        "datacontenttype": "application/json",
        "kogitoprocinstanceid": "123",
        "data": {"issuer": "BankPremium", "rate": 4.655600086643112},
    }
    event.update(overrides)
    return event


# Structured Mode Tests


def test_from_structured_decodes_attributes_and_data():
    event = from_structured(json.dumps(structured_event()))

    assert event.id == "123456"
    assert event.source == "/local/tests"
    assert event.type == OFFER_TYPE
    assert event.datacontenttype == "application/json"
    assert event.payload() == {"issuer": "BankPremium", "rate": 4.655600086643112}


def test_from_structured_keeps_extensions():
    event = from_structured(json.dumps(structured_event(traceparent="00-abc")).encode())

    assert event.extension("kogitoprocinstanceid") == "123"
    assert event.extension("traceparent") == "00-abc"
    assert event.extension("missing") is None
    assert "id" not in event.extensions


def test_from_structured_decodes_base64_data():
    body = json.dumps({"issuer": "BankStar", "rate": 5.4342645}).encode()
    raw = structured_event(data_base64=base64.b64encode(body).decode())
    del raw["data"]

    event = from_structured(json.dumps(raw))

    assert event.payload() == body


def test_invalid_base64_data_is_malformed():
    raw = structured_event(data_base64="***")
    del raw["data"]
    event = from_structured(json.dumps(raw))

    with pytest.raises(MalformedEnvelope):
        event.payload()


@pytest.mark.parametrize("missing", ["specversion", "id", "source", "type"])
def test_from_structured_requires_core_attributes(missing):
    raw = structured_event()
    del raw[missing]

    with pytest.raises(MalformedEnvelope, match=missing):
        from_structured(json.dumps(raw))


def test_from_structured_rejects_unsupported_specversion():
    with pytest.raises(MalformedEnvelope):
        from_structured(json.dumps(structured_event(specversion="0.3")))


def test_from_structured_rejects_invalid_json():
    with pytest.raises(MalformedEnvelope):
        from_structured(b"{not json")


# Binary Mode Tests


def test_from_binary_maps_headers_to_attributes():
    headers = {
        "ce-specversion": "1.0",
        "ce-id": "123456",
        "ce-source": "/local/tests",
        "ce-type": OFFER_TYPE,
        "Ce-KogitoProcInstanceId": "456",
        "Content-Type": "application/json",
        "Accept": "*/*",
    }
    body = b'{"issuer": "BankPremium", "rate": 5.4342645}'

    event = from_binary(headers, body)

    assert event.id == "123456"
    assert event.datacontenttype == "application/json"
    assert event.extension("kogitoprocinstanceid") == "456"
    assert event.payload() == body
    assert "accept" not in event.extensions


def test_from_binary_with_empty_body_has_no_data():
    headers = {
        "ce-specversion": "1.0",
        "ce-id": "1",
        "ce-source": "/s",
        "ce-type": OFFER_TYPE,
    }

    assert from_binary(headers, b"").payload() is None


def test_from_binary_requires_core_attributes():
    with pytest.raises(MalformedEnvelope):
        from_binary({"content-type": "application/json"}, b"{}")


# Content Mode Detection Tests


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("application/cloudevents+json", True),
        ("application/cloudevents+json; charset=utf-8", True),
        ("Application/CloudEvents+JSON", True),
        ("application/json", False),
        ("", False),
        (None, False),
    ],
)
def test_is_structured(content_type, expected):
    assert is_structured(content_type) is expected


def test_cloud_event_is_immutable():
    event = CloudEvent.model_validate(structured_event())

    with pytest.raises(ValidationError):
        event.id = "other"  # type: ignore[misc]
