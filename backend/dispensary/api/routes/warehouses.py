"""
Warehouse API routes.

Endpoints:
- GET /api/warehouses -> active warehouses by name (filters: type, epsCode)
"""

from __future__ import annotations

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from dispensary.core.deps import get_warehouse_lister
from dispensary.core.errors import listing_error_response
from dispensary.schemas.warehouses import WarehouseListResponse
from dispensary.services.warehouse_lister import WarehouseLister

router = APIRouter(prefix="/api/warehouses", tags=["warehouses"])


@router.get(
    "",
    response_model=WarehouseListResponse,
    responses={500: {"description": "Store query failed: {error, warehouses: []}"}},
)
def list_warehouses(
    warehouse_type: Optional[str] = Query(None, alias="type", max_length=32, description="Warehouse type, e.g. EPS"),
    eps_code: Optional[str] = Query(None, alias="epsCode", max_length=32, description="Keep warehouses whose code starts with this EPS code"),
    lister: WarehouseLister = Depends(get_warehouse_lister),
) -> Union[WarehouseListResponse, JSONResponse]:
    result = lister.list(warehouse_type=warehouse_type, eps_code=eps_code)
    if not result.ok:
        return listing_error_response(result.error, warehouses=[])
    return result.payload
