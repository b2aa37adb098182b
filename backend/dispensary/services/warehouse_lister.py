"""
Warehouse listing: active warehouses by name, filterable by type and EPS.
"""

from __future__ import annotations

from typing import Optional

from dispensary.core.contracts import WarehouseRepo
from dispensary.schemas.warehouses import WarehouseListResponse, WarehouseOut
from dispensary.services.listing import ListingResult, run_listing

__all__ = ["WarehouseLister", "WAREHOUSES_ERROR"]

WAREHOUSES_ERROR = "Error listando bodegas"


class WarehouseLister:
    def __init__(self, repo: WarehouseRepo) -> None:
        self.repo = repo

    def list(
        self, *, warehouse_type: Optional[str] = None, eps_code: Optional[str] = None
    ) -> ListingResult[WarehouseListResponse]:
        def query() -> WarehouseListResponse:
            items = self.repo.list_active(warehouse_type=warehouse_type, eps_code=eps_code)
            return WarehouseListResponse(warehouses=[WarehouseOut.model_validate(w) for w in items])

        return run_listing("warehouses", query, WAREHOUSES_ERROR)
