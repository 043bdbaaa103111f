"""Product router: list, create, and fetch products."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import Depends, Request, Response, status

from catalogkit.core.api.router import Router
from catalogkit.core.api.utilities import build_location_url
from catalogkit.core.exceptions import NotFoundError
from catalogkit.core.schemas import ProblemDetail

from .manager import ProductManager
from .schemas import ProductIn, ProductOut

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ProblemDetail, "description": "Malformed request"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ProblemDetail, "description": "Storage failure"},
}


class ProductRouter(Router):
    """Router exposing the product catalog."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Any,
        **kwargs: Any,
    ) -> None:
        """Initialize product router with a manager dependency factory."""
        self.manager_factory = manager_factory
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _register_routes(self) -> None:
        """Register product routes."""
        manager_factory = self.manager_factory
        prefix = self.router.prefix

        @self.router.get(
            "",
            summary="List products",
            response_model=list[ProductOut],
            responses={status.HTTP_500_INTERNAL_SERVER_ERROR: _ERROR_RESPONSES[500]},
        )
        async def list_products(manager: ProductManager = Depends(manager_factory)) -> list[ProductOut]:
            return await manager.list_products()

        @self.router.post(
            "",
            summary="Create product",
            response_model=ProductOut,
            status_code=status.HTTP_201_CREATED,
            responses=_ERROR_RESPONSES,
        )
        async def create_product(
            data: ProductIn,
            request: Request,
            response: Response,
            manager: ProductManager = Depends(manager_factory),
        ) -> ProductOut:
            product = await manager.create_product(data)
            response.headers["Location"] = build_location_url(request, f"{prefix}/{product.id}")
            return product

        @self.router.get(
            "/{entity_id}",
            summary="Get product by id",
            response_model=ProductOut,
            responses={
                **_ERROR_RESPONSES,
                status.HTTP_404_NOT_FOUND: {"model": ProblemDetail, "description": "Product not found"},
            },
        )
        async def get_product(entity_id: str, manager: ProductManager = Depends(manager_factory)) -> ProductOut:
            product = await manager.find_by_id(self._parse_id(entity_id))
            if product is None:
                raise NotFoundError(f"Product with id {entity_id} not found")
            return product
