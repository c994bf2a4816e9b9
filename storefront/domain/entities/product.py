"""Product entity model."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Product(BaseModel):
    """Catalog product; read-only from the cart's point of view."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = Field(None, description="Product ID (auto-generated)")
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field("", description="Product description")
    price: Decimal = Field(..., ge=0, description="Base price")
    sale_price: Optional[Decimal] = Field(None, ge=0, description="Discounted price")
    image_url: str = Field("", description="Product image URL")
    category: str = Field(..., min_length=1, description="Category label")
    rating: float = Field(0.0, ge=0, le=5, description="Average rating")
    reviews: int = Field(0, ge=0, description="Review count")
    in_stock: bool = True
    featured: bool = False

    @model_validator(mode="after")
    def validate_sale_price(self) -> Product:
        """Sale price may not exceed the base price."""
        if self.sale_price is not None and self.sale_price > self.price:
            raise ValueError("Sale price must not exceed price")
        return self

    @property
    def effective_price(self) -> Decimal:
        """Price the customer pays."""
        return self.sale_price if self.sale_price is not None else self.price

    @property
    def is_on_sale(self) -> bool:
        return self.sale_price is not None and self.sale_price < self.price

    @property
    def discount_percent(self) -> int:
        """Discount percentage, rounded half-up to a whole number."""
        if not self.is_on_sale or self.price == 0:
            return 0
        percent = (1 - self.effective_price / self.price) * 100
        return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
