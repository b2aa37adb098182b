"""
EPS listing: active insurers, alphabetical, projected to id/code/name.
"""

from __future__ import annotations

from dispensary.core.contracts import EpsRepo
from dispensary.schemas.eps import EpsListResponse, EpsOut
from dispensary.services.listing import ListingResult, run_listing

__all__ = ["EpsLister", "EPS_ERROR"]

EPS_ERROR = "Error listando EPS"


class EpsLister:
    def __init__(self, repo: EpsRepo) -> None:
        self.repo = repo

    def list(self) -> ListingResult[EpsListResponse]:
        return run_listing("eps", self._query, EPS_ERROR)

    def _query(self) -> EpsListResponse:
        # Store order (name ascending) is kept; inactive rows never reach the payload.
        records = [e for e in self.repo.list_active() if getattr(e, "is_active", True)]
        return EpsListResponse(eps=[EpsOut.model_validate(e) for e in records])
