"""Central test fixtures."""

import pytest

from quote_aggregator.application import AggregationService, InMemoryQuoteStore
from quote_aggregator.config import AggregatorSettings
from quote_aggregator.domain import BankQuote


@pytest.fixture
def correlation_id() -> str:
    """A workflow instance id."""
    return "123"


@pytest.fixture
def premium_quote() -> BankQuote:
    return BankQuote(issuer="BankPremium", rate=4.655600086643112)


@pytest.fixture
def star_quote() -> BankQuote:
    return BankQuote(issuer="BankStar", rate=5.4342645)


@pytest.fixture
def quote_store() -> InMemoryQuoteStore:
    """Create an in-memory quote store."""
    return InMemoryQuoteStore()


@pytest.fixture
def service(quote_store: InMemoryQuoteStore) -> AggregationService:
    """Create an aggregation service owning the in-memory store."""
    return AggregationService(quote_store)


@pytest.fixture
def settings() -> AggregatorSettings:
    """Settings with the maintenance endpoint enabled, as in test deployments."""
    return AggregatorSettings(enable_maintenance=True)


@pytest.fixture(autouse=True)
def clear_execution_context():
    """Automatically clear execution context after each test."""
    yield
    from quote_aggregator.context import clear_context

    clear_context()
