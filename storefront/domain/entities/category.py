"""Category entity model."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """Product category shown on the home page."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=100)
    image_url: str = ""
