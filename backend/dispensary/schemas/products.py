"""
Pydantic models for the product catalog search.

Designed to be compatible with dispensary.models.product.Product; serialized
with the camelCase keys the dashboard expects.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["ProductOut", "ProductListResponse"]


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    code: str
    name: str
    molecule: Optional[str] = None
    presentation: Optional[str] = None
    concentration: Optional[str] = None
    laboratory: Optional[str] = None
    price: float = 0.0
    requires_prescription: bool = Field(default=True, alias="requiresPrescription")
    is_controlled: bool = Field(default=False, alias="isControlled")
    is_active: bool = Field(default=True, alias="isActive")


class ProductListResponse(BaseModel):
    products: list[ProductOut] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Products matching the filter, ignoring pagination")
