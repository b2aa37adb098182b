"""
EPS API routes.

Endpoints:
- GET /api/eps/list -> active EPS records (id, code, name) by name
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dispensary.core.deps import get_eps_lister
from dispensary.core.errors import listing_error_response
from dispensary.schemas.eps import EpsListResponse
from dispensary.services.eps_lister import EpsLister

router = APIRouter(prefix="/api/eps", tags=["eps"])


@router.get(
    "/list",
    response_model=EpsListResponse,
    responses={500: {"description": "Store query failed: {error, eps: []}"}},
)
def list_eps(
    lister: EpsLister = Depends(get_eps_lister),
) -> Union[EpsListResponse, JSONResponse]:
    result = lister.list()
    if not result.ok:
        return listing_error_response(result.error, eps=[])
    return result.payload
