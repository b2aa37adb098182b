"""
Pydantic models for the EPS listing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["EpsOut", "EpsListResponse"]


class EpsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str


class EpsListResponse(BaseModel):
    eps: list[EpsOut] = Field(default_factory=list)
