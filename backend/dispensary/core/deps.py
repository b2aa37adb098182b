"""
Dependency wiring for repositories and listers.

Factory functions construct the concrete SQLAlchemy repositories behind the
Protocols in dispensary.core.contracts and bind them to the listers. Routes
depend on the get_*_lister providers; tests replace them through
app.dependency_overrides. No business logic lives here.
"""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from dispensary.core.contracts import EpsRepo, OrganizationRepo, ProductRepo, WarehouseRepo
from dispensary.db.session import get_db
from dispensary.services.eps_lister import EpsLister
from dispensary.services.molecule_lister import MoleculeLister
from dispensary.services.organization_lister import OrganizationLister
from dispensary.services.product_search import ProductSearch
from dispensary.services.warehouse_lister import WarehouseLister

__all__ = [
    # repos
    "get_organization_repo",
    "get_eps_repo",
    "get_product_repo",
    "get_warehouse_repo",
    # listers
    "get_organization_lister",
    "get_eps_lister",
    "get_molecule_lister",
    "get_product_search",
    "get_warehouse_lister",
]

# -------------------------------
# Repository Providers
# -------------------------------

def get_organization_repo(db: Session = Depends(get_db)) -> OrganizationRepo:
    """Provide an OrganizationRepo bound to the current DB session."""
    from dispensary.repos.organization_repo import SqlAlchemyOrganizationRepo
    return SqlAlchemyOrganizationRepo(db)

def get_eps_repo(db: Session = Depends(get_db)) -> EpsRepo:
    """Provide an EpsRepo bound to the current DB session."""
    from dispensary.repos.eps_repo import SqlAlchemyEpsRepo
    return SqlAlchemyEpsRepo(db)

def get_product_repo(db: Session = Depends(get_db)) -> ProductRepo:
    """Provide a ProductRepo bound to the current DB session."""
    from dispensary.repos.product_repo import SqlAlchemyProductRepo
    return SqlAlchemyProductRepo(db)

def get_warehouse_repo(db: Session = Depends(get_db)) -> WarehouseRepo:
    """Provide a WarehouseRepo bound to the current DB session."""
    from dispensary.repos.warehouse_repo import SqlAlchemyWarehouseRepo
    return SqlAlchemyWarehouseRepo(db)

# -------------------------------
# Lister Providers
# -------------------------------

def get_organization_lister(repo: OrganizationRepo = Depends(get_organization_repo)) -> OrganizationLister:
    return OrganizationLister(repo)

def get_eps_lister(repo: EpsRepo = Depends(get_eps_repo)) -> EpsLister:
    return EpsLister(repo)

def get_molecule_lister(repo: ProductRepo = Depends(get_product_repo)) -> MoleculeLister:
    return MoleculeLister(repo)

def get_product_search(repo: ProductRepo = Depends(get_product_repo)) -> ProductSearch:
    return ProductSearch(repo)

def get_warehouse_lister(repo: WarehouseRepo = Depends(get_warehouse_repo)) -> WarehouseLister:
    return WarehouseLister(repo)
