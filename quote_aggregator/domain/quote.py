from pydantic import BaseModel, ConfigDict, Field


class BankQuote(BaseModel):
    """A loan rate offered by a bank in response to a quote request.

    Quotes are immutable values with no identity beyond their fields. Two
    quotes with identical fields compare equal, but both are retained when
    recorded: the aggregator counts arrivals, not distinct offers.

    Attributes:
        issuer: Short identifying name of the bank that issued the quote.
        rate: The offered interest rate. Must be a finite number.

    Examples:
        >>> quote = BankQuote(issuer="BankPremium", rate=4.655600086643112)
        >>> quote == BankQuote(issuer="BankPremium", rate=4.655600086643112)
        True

    Note:
        An empty issuer, or a rate that is not a finite number (including
        numeric strings and booleans), fails validation.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")

    issuer: str = Field(min_length=1, description="Name of the issuing bank")
    rate: float = Field(strict=True, description="Offered interest rate (finite)")
