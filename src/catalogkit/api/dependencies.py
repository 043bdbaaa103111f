"""Feature-specific FastAPI dependency injection for managers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalogkit.core.api.dependencies import get_session
from catalogkit.modules.product import ProductManager, ProductRepository


async def get_product_manager(session: Annotated[AsyncSession, Depends(get_session)]) -> ProductManager:
    """Get a product manager instance for dependency injection."""
    return ProductManager(ProductRepository(session))
