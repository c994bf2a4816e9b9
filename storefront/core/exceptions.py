"""Custom exceptions for the storefront."""
from __future__ import annotations


class StorefrontException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class DatabaseException(StorefrontException):
    """Database-related errors."""

    pass


class ProductNotFoundException(StorefrontException):
    """Product not found in the catalog."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class ValidationException(StorefrontException):
    """Input validation errors."""

    pass


class CheckoutValidationException(ValidationException):
    """Checkout form rejected with field-level messages."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(f"Checkout validation failed for: {', '.join(sorted(errors))}")
        self.errors = errors


class ConfigurationException(StorefrontException):
    """Configuration errors."""

    pass
