"""
Molecule listing: distinct active-ingredient names of active products.

The store is asked for DISTINCT, non-null, ascending values; the result is
still normalized here (nulls and empty strings dropped, duplicates collapsed,
sorted) so the invariants hold for stores that honor the request loosely.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from dispensary.core.contracts import ProductRepo
from dispensary.services.listing import ListingResult, run_listing

__all__ = ["MoleculeLister", "MOLECULES_ERROR", "normalize_molecules"]

MOLECULES_ERROR = "Error fetching molecules"


def normalize_molecules(values: Iterable[Optional[str]]) -> List[str]:
    return sorted({m for m in values if m is not None and m != ""})


class MoleculeLister:
    def __init__(self, repo: ProductRepo) -> None:
        self.repo = repo

    def list(self) -> ListingResult[List[str]]:
        return run_listing(
            "molecules",
            lambda: normalize_molecules(self.repo.list_active_molecules()),
            MOLECULES_ERROR,
        )
