"""Product schemas for create input and API output."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from catalogkit.core.types import DecimalNumber


class ProductIn(BaseModel):
    """Input schema for creating a product."""

    name: str = Field(min_length=1, description="Product display name")
    price: DecimalNumber = Field(default=Decimal("0"), max_digits=12, decimal_places=2, description="Unit price")


class ProductOut(BaseModel):
    """Output schema for a stored product."""

    id: int = Field(description="Storage-generated identifier")
    name: str
    price: DecimalNumber

    model_config = ConfigDict(from_attributes=True)
