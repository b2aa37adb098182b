"""
Product catalog search (code, name or molecule), paginated.
"""

from __future__ import annotations

from typing import Optional

from dispensary.core.contracts import ProductRepo
from dispensary.schemas.products import ProductListResponse, ProductOut
from dispensary.services.listing import ListingResult, run_listing

__all__ = ["ProductSearch", "PRODUCTS_ERROR"]

PRODUCTS_ERROR = "Error listando productos"


class ProductSearch:
    def __init__(self, repo: ProductRepo) -> None:
        self.repo = repo

    def search(
        self,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> ListingResult[ProductListResponse]:
        def query() -> ProductListResponse:
            items, total = self.repo.search(search=search, is_active=is_active, offset=offset, limit=limit)
            return ProductListResponse(
                products=[ProductOut.model_validate(p) for p in items],
                total=total,
            )

        return run_listing("products", query, PRODUCTS_ERROR)
