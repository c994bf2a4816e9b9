"""Value Objects for domain model."""
from __future__ import annotations

from enum import Enum


class PaymentMethod(str, Enum):
    """Payment options offered at checkout."""

    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple-pay"


class Country(str, Enum):
    """Countries the store ships to."""

    US = "US"
    CA = "CA"
    UK = "UK"
    AU = "AU"

    @property
    def label(self) -> str:
        return COUNTRY_LABELS[self]


COUNTRY_LABELS = {
    Country.US: "United States",
    Country.CA: "Canada",
    Country.UK: "United Kingdom",
    Country.AU: "Australia",
}
