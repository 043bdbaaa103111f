"""Schema creation and seed data for the products table."""

from __future__ import annotations

from decimal import Decimal

from catalogkit.core import Database
from catalogkit.core.logging import get_logger

from .manager import ProductManager
from .repository import ProductRepository
from .schemas import ProductIn

logger = get_logger(__name__)

SEED_PRODUCTS: tuple[ProductIn, ...] = (
    ProductIn(name="Laptop", price=Decimal("1200.00")),
    ProductIn(name="Smartphone", price=Decimal("800.00")),
    ProductIn(name="Tablet", price=Decimal("400.00")),
)


async def ensure_schema(database: Database) -> int:
    """Create the products table if needed and seed it when empty.

    Returns the number of rows inserted, which is 0 on every call after the
    first one against the same store.
    """
    await database.init()

    async with database.session() as session:
        manager = ProductManager(ProductRepository(session))
        if await manager.count() > 0:
            logger.debug("products.seed_skipped")
            return 0

        seeded = await manager.save_all(SEED_PRODUCTS)

    logger.info("products.seeded", count=len(seeded))
    return len(seeded)
