"""Checkout form validation.

The form arrives as a flat mapping of strings. ``validate_checkout`` folds the
card fields into a payment variant chosen by ``payment_method`` so card data
only exists (and is only required) for credit-card payments.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator
from pydantic.alias_generators import to_snake

from storefront.core.exceptions import CheckoutValidationException
from storefront.core.sanitize import mask_card_number, strip_whitespace
from storefront.domain.value_objects import Country, PaymentMethod

CHECKOUT_MESSAGES: dict[str, str] = {
    "first_name": "First name must be at least 2 characters",
    "last_name": "Last name must be at least 2 characters",
    "email": "Please enter a valid email address",
    "phone": "Please enter a valid phone number",
    "address": "Please enter your full address",
    "city": "City is required",
    "state": "State/Province is required",
    "zip": "ZIP/Postal code is required",
    "country": "Please select a country",
    "payment_method": "Please select a payment method",
    "card_number": "Card number must be 16 digits",
    "expiry_date": "Expiry date must be in MM/YY format",
    "cvc": "CVC must be 3 or 4 digits",
    "card_name": "Cardholder name is required",
    "terms": "You must agree to the terms and conditions",
}

CARD_FIELDS = ("card_number", "expiry_date", "cvc", "card_name")


class _FormModel(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class CreditCardPayment(_FormModel):
    method: Literal["credit-card"] = "credit-card"
    card_number: str = Field(..., pattern=r"^\d{16}$")
    expiry_date: str = Field(..., pattern=r"^(0[1-9]|1[0-2])/\d{2}$")
    cvc: str = Field(..., pattern=r"^\d{3,4}$")
    card_name: str = Field(..., min_length=3)

    @field_validator("card_number", mode="before")
    @classmethod
    def strip_card_number(cls, v: Any) -> Any:
        return strip_whitespace(v) if isinstance(v, str) else v

    @property
    def masked_card_number(self) -> str:
        return mask_card_number(self.card_number)


class PayPalPayment(_FormModel):
    method: Literal["paypal"] = "paypal"


class ApplePayPayment(_FormModel):
    method: Literal["apple-pay"] = "apple-pay"


Payment = Annotated[
    Union[CreditCardPayment, PayPalPayment, ApplePayPayment],
    Field(discriminator="method"),
]


class CheckoutForm(_FormModel):
    """Validated checkout data."""

    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)
    address: str = Field(..., min_length=5)
    city: str = Field(..., min_length=2)
    state: str = Field(..., min_length=2)
    zip: str = Field(..., min_length=4)
    country: Country
    payment: Payment
    terms: Literal[True]

    @property
    def payment_method(self) -> PaymentMethod:
        return PaymentMethod(self.payment.method)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a validation pass: a form or field errors, never both."""

    form: CheckoutForm | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.form is not None and not self.errors

    def raise_for_errors(self) -> CheckoutForm:
        if not self.is_valid:
            raise CheckoutValidationException(dict(self.errors))
        return self.form


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Accept camelCase (``firstName``) or snake_case keys."""
    return {to_snake(str(key)): value for key, value in fields.items()}


def _build_payload(fields: dict[str, Any]) -> dict[str, Any]:
    payload = {
        key: value
        for key, value in fields.items()
        if key not in CARD_FIELDS and key != "payment_method"
    }
    method = fields.get("payment_method")
    if isinstance(method, PaymentMethod):
        method = method.value
    payment: dict[str, Any] = {"method": method}
    if method == PaymentMethod.CREDIT_CARD.value:
        payment.update({name: fields.get(name) for name in CARD_FIELDS if name in fields})
    payload["payment"] = payment
    return payload


def _field_for_error(loc: tuple[Any, ...]) -> str:
    if not loc:
        return "form"
    head = str(loc[0])
    if head == "payment":
        # ("payment", "credit-card", "cvc") for variant fields,
        # ("payment",) when the tag itself is missing or unknown
        if len(loc) >= 3:
            return str(loc[2])
        return "payment_method"
    return head


def validate_checkout(fields: Mapping[str, Any]) -> CheckoutResult:
    """Validate a flat checkout record.

    Returns every failing field with its message; the form is only built when
    all rules pass.
    """
    normalized = normalize_fields(fields)
    try:
        form = CheckoutForm.model_validate(_build_payload(normalized))
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for error in exc.errors():
            name = _field_for_error(error["loc"])
            errors.setdefault(name, CHECKOUT_MESSAGES.get(name, error["msg"]))
        return CheckoutResult(errors=errors)
    return CheckoutResult(form=form)
