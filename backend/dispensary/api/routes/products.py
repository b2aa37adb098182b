"""
Product API routes.

Endpoints:
- GET /api/products            -> catalog search (search, isActive, offset, limit)
- GET /api/products/molecules  -> distinct molecules of active products, as a bare array

The molecule listing answers with a bare JSON array of strings rather than an
object; existing dashboard clients read it that way.
"""

from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from dispensary.core.config import get_settings
from dispensary.core.deps import get_molecule_lister, get_product_search
from dispensary.core.errors import ApiError, listing_error_response
from dispensary.schemas.products import ProductListResponse
from dispensary.services.molecule_lister import MoleculeLister
from dispensary.services.product_search import ProductSearch

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get(
    "",
    response_model=ProductListResponse,
    responses={500: {"description": "Store query failed: {error, products: [], total: 0}"}},
)
def search_products(
    search: Optional[str] = Query(None, max_length=255, description="Matches code, name or molecule"),
    is_active: Optional[bool] = Query(None, alias="isActive", description="Filter by active flag"),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
    product_search: ProductSearch = Depends(get_product_search),
) -> Union[ProductListResponse, JSONResponse]:
    """
    Search the product catalog, ordered by name.
    """
    max_limit = get_settings().products_max_limit
    if limit > max_limit:
        raise ApiError(
            f"limit must be at most {max_limit}",
            details={"limit": limit, "max": max_limit},
            status_code=422,
            code="validation_error",
        )

    result = product_search.search(search=search, is_active=is_active, offset=offset, limit=limit)
    if not result.ok:
        return listing_error_response(result.error, products=[], total=0)
    return result.payload


@router.get(
    "/molecules",
    response_model=List[str],
    responses={500: {"description": "Store query failed: {error}"}},
)
def list_molecules(
    lister: MoleculeLister = Depends(get_molecule_lister),
) -> Union[List[str], JSONResponse]:
    result = lister.list()
    if not result.ok:
        return listing_error_response(result.error)
    return result.payload
