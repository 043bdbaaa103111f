"""Product repository for database access."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalogkit.core.repository import BaseRepository

from .models import Product


class ProductRepository(BaseRepository[Product, int]):
    """Repository for Product entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize product repository with database session."""
        super().__init__(session, Product)
