"""Product feature - catalog entities with list and create operations."""

from .manager import ProductManager
from .models import Product
from .repository import ProductRepository
from .router import ProductRouter
from .schemas import ProductIn, ProductOut
from .seed import SEED_PRODUCTS, ensure_schema

__all__ = [
    "Product",
    "ProductIn",
    "ProductOut",
    "ProductRepository",
    "ProductManager",
    "ProductRouter",
    "SEED_PRODUCTS",
    "ensure_schema",
]
