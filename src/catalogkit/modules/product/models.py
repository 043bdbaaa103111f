"""Product ORM model."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalogkit.core.models import Entity


class Product(Entity):
    """ORM model for a catalog product."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
