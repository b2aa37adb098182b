"""
Organization API routes.

Endpoints:
- GET /api/organizations/list -> every organization with its member count

Routes are thin: they delegate to a lister and map its result to a response.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dispensary.core.deps import get_organization_lister
from dispensary.core.errors import listing_error_response
from dispensary.schemas.organizations import OrganizationListResponse
from dispensary.services.organization_lister import OrganizationLister

router = APIRouter(prefix="/api/organizations", tags=["organizations"])


@router.get(
    "/list",
    response_model=OrganizationListResponse,
    responses={500: {"description": "Store query failed: {error, count: 0, organizations: []}"}},
)
def list_organizations(
    lister: OrganizationLister = Depends(get_organization_lister),
) -> Union[OrganizationListResponse, JSONResponse]:
    """
    List all organizations with `_count.members`.
    """
    result = lister.list()
    if not result.ok:
        return listing_error_response(result.error, count=0, organizations=[])
    return result.payload
