"""
Pydantic models for the warehouse listing.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["WarehouseOut", "WarehouseListResponse"]


class WarehouseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    code: str
    name: str
    type: str
    eps_id: Optional[int] = Field(default=None, alias="epsId")
    address: Optional[str] = None


class WarehouseListResponse(BaseModel):
    warehouses: list[WarehouseOut] = Field(default_factory=list)
