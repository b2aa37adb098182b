"""
Organization listing: every organization with its member count.
"""

from __future__ import annotations

from dispensary.core.contracts import OrganizationRepo
from dispensary.schemas.organizations import MemberCount, OrganizationListResponse, OrganizationOut
from dispensary.services.listing import ListingResult, run_listing

__all__ = ["OrganizationLister", "ORGANIZATIONS_ERROR"]

ORGANIZATIONS_ERROR = "Error listando organizaciones"


class OrganizationLister:
    def __init__(self, repo: OrganizationRepo) -> None:
        self.repo = repo

    def list(self) -> ListingResult[OrganizationListResponse]:
        return run_listing("organizations", self._query, ORGANIZATIONS_ERROR)

    def _query(self) -> OrganizationListResponse:
        organizations = [
            OrganizationOut(
                id=summary.id,
                name=summary.name,
                slug=summary.slug,
                created_at=summary.created_at,
                count=MemberCount(members=summary.member_count),
            )
            for summary in self.repo.list_with_member_counts()
        ]
        return OrganizationListResponse(count=len(organizations), organizations=organizations)
