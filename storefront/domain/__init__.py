"""Domain package."""

from .entities import Category, Product
from .value_objects import Country, PaymentMethod

__all__ = [
    # Entities
    "Category",
    "Product",
    # Value Objects
    "Country",
    "PaymentMethod",
]
