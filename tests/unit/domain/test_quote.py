"""Tests for the BankQuote value type."""

import math

import pytest
from pydantic import ValidationError

from quote_aggregator.domain import BankQuote


def test_quotes_with_same_fields_are_equal():
    assert BankQuote(issuer="BankPremium", rate=4.6556) == BankQuote(
        issuer="BankPremium", rate=4.6556
    )


def test_quotes_with_different_rates_are_not_equal():
    assert BankQuote(issuer="BankPremium", rate=4.6556) != BankQuote(
        issuer="BankPremium", rate=5.4342645
    )


def test_quote_is_immutable():
    quote = BankQuote(issuer="BankStar", rate=5.4342645)

    with pytest.raises(ValidationError):
        quote.rate = 1.0  # type: ignore[misc]


def test_quote_is_hashable():
    quote = BankQuote(issuer="BankStar", rate=5.4342645)

    assert quote in {BankQuote(issuer="BankStar", rate=5.4342645)}


def test_integer_rate_is_accepted():
    assert BankQuote(issuer="BankStar", rate=5).rate == 5.0


@pytest.mark.parametrize("rate", [math.nan, math.inf, -math.inf])
def test_non_finite_rate_is_rejected(rate):
    with pytest.raises(ValidationError):
        BankQuote(issuer="BankStar", rate=rate)


def test_string_rate_is_rejected():
    with pytest.raises(ValidationError):
        BankQuote(issuer="BankStar", rate="5.43")  # type: ignore[arg-type]


def test_empty_issuer_is_rejected():
    with pytest.raises(ValidationError):
        BankQuote(issuer="", rate=4.6556)


def test_missing_fields_are_rejected():
    with pytest.raises(ValidationError):
        BankQuote.model_validate({"issuer": "BankStar"})
    with pytest.raises(ValidationError):
        BankQuote.model_validate({"rate": 4.6556})


def test_json_round_trip_shape():
    quote = BankQuote.model_validate_json('{"issuer": "BankPremium", "rate": 4.655600086643112}')

    assert quote.model_dump() == {"issuer": "BankPremium", "rate": 4.655600086643112}


def test_unknown_fields_are_ignored():
    quote = BankQuote.model_validate({"issuer": "BankStar", "rate": 5.4342645, "term": 12})

    assert quote == BankQuote(issuer="BankStar", rate=5.4342645)
