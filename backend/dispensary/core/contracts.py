"""
Repository contracts (Protocols) for the data access layer.

These Protocols define the read operations the listers depend on. Concrete
implementations use SQLAlchemy (dispensary.repos.*); tests substitute in-memory
fakes.

Protocols:
- OrganizationRepo
- EpsRepo
- ProductRepo
- WarehouseRepo
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence, Tuple, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from dispensary.models.eps import Eps
    from dispensary.models.product import Product
    from dispensary.models.warehouse import Warehouse

__all__ = [
    "OrganizationSummary",
    "OrganizationRepo",
    "EpsRepo",
    "ProductRepo",
    "WarehouseRepo",
]


@dataclass(frozen=True)
class OrganizationSummary:
    """Organization projection with its aggregated member count."""

    id: int
    name: str
    slug: str
    created_at: datetime
    member_count: int


@runtime_checkable
class OrganizationRepo(Protocol):
    def list_with_member_counts(self) -> Sequence[OrganizationSummary]:
        """Every organization with the number of its members."""
        raise NotImplementedError()


@runtime_checkable
class EpsRepo(Protocol):
    def list_active(self) -> Sequence["Eps"]:
        """Active EPS records ordered by name ascending."""
        raise NotImplementedError()


@runtime_checkable
class ProductRepo(Protocol):
    def list_active_molecules(self) -> Sequence[Optional[str]]:
        """Distinct molecules of active products, ascending."""
        raise NotImplementedError()

    def search(
        self,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[Sequence["Product"], int]:
        """One page of matching products ordered by name, and the total match count."""
        raise NotImplementedError()


@runtime_checkable
class WarehouseRepo(Protocol):
    def list_active(
        self, *, warehouse_type: Optional[str] = None, eps_code: Optional[str] = None
    ) -> Sequence["Warehouse"]:
        """Active warehouses ordered by name, optionally filtered by type and EPS code prefix."""
        raise NotImplementedError()
