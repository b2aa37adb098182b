"""
Pydantic models for the organization listing.

Wire keys follow the dashboard client: `createdAt` and `_count.members`.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["MemberCount", "OrganizationOut", "OrganizationListResponse"]


class MemberCount(BaseModel):
    members: int = Field(..., ge=0)


class OrganizationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    slug: str
    created_at: datetime = Field(..., alias="createdAt")
    count: MemberCount = Field(..., alias="_count")


class OrganizationListResponse(BaseModel):
    count: int = Field(..., ge=0, description="Number of organizations returned")
    organizations: list[OrganizationOut] = Field(default_factory=list)
