"""Product manager: the persistence gateway used by the HTTP layer."""

from __future__ import annotations

from opentelemetry import metrics

from catalogkit.core.logging import get_logger
from catalogkit.core.manager import BaseManager

from .models import Product
from .repository import ProductRepository
from .schemas import ProductIn, ProductOut

logger = get_logger(__name__)

meter = metrics.get_meter("catalogkit.products")
products_created = meter.create_counter(
    "catalog.products.created",
    unit="1",
    description="Number of products created through the API",
)


class ProductManager(BaseManager[Product, ProductIn, ProductOut, int]):
    """Manager for Product entities."""

    def __init__(self, repo: ProductRepository) -> None:
        """Initialize product manager with repository."""
        super().__init__(repo, Product, ProductOut)
        self.repo: ProductRepository = repo

    async def list_products(self) -> list[ProductOut]:
        """Return every stored product ordered by id."""
        return await self.find_all()

    async def create_product(self, data: ProductIn) -> ProductOut:
        """Insert a product and return it with its generated id."""
        product = await self.save(data)
        products_created.add(1)
        logger.info("product.created", product_id=product.id, name=product.name)
        return product
