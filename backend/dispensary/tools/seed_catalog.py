"""
CLI to seed a development database with a default catalog.

- Creates missing tables on the configured database (DATABASE_URL / DB_URL).
- Idempotently creates the default organization (slug "default-org") with an
  OWNER member, a set of EPS records, products and warehouses.
- Prints a JSON summary: {"created": {...}, "skipped": {...}}.

Usage examples:
  python -m dispensary.tools.seed_catalog
  python -m dispensary.tools.seed_catalog --owner-user-id admin-1
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Dict, List

# Ensure the 'backend' directory is on sys.path so we can import dispensary modules
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, "..", ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from sqlalchemy.orm import Session  # noqa: E402

from dispensary.core.logging import get_logger, init_logging  # noqa: E402
from dispensary.db.base import Base  # noqa: E402
from dispensary.db.session import SessionLocal, engine  # noqa: E402
from dispensary.repos.eps_repo import SqlAlchemyEpsRepo  # noqa: E402
from dispensary.repos.organization_repo import SqlAlchemyOrganizationRepo  # noqa: E402
from dispensary.repos.product_repo import SqlAlchemyProductRepo  # noqa: E402
from dispensary.repos.warehouse_repo import SqlAlchemyWarehouseRepo  # noqa: E402

log = get_logger(__name__)

DEFAULT_ORG_SLUG = "default-org"
DEFAULT_ORG_NAME = "Organización Principal"

SEED_EPS: List[Dict[str, Any]] = [
    {"code": "EPS005", "name": "Sanitas"},
    {"code": "EPS037", "name": "Nueva EPS"},
    {"code": "EPS010", "name": "Sura", "has_api": True, "api_endpoint": "https://api.epssura.example/afiliados"},
    {"code": "FOMAG", "name": "Fondo Nacional de Prestaciones del Magisterio"},
]

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "code": "MED-0001",
        "name": "Acetaminofén 500 mg tabletas",
        "molecule": "Acetaminofén",
        "presentation": "Caja x 100 tabletas",
        "concentration": "500 mg",
        "laboratory": "Genfar",
        "price": 8500,
        "requires_prescription": False,
    },
    {
        "code": "MED-0002",
        "name": "Amoxicilina 500 mg cápsulas",
        "molecule": "Amoxicilina",
        "presentation": "Caja x 50 cápsulas",
        "concentration": "500 mg",
        "laboratory": "MK",
        "price": 12300,
    },
    {
        "code": "MED-0003",
        "name": "Ibuprofeno 400 mg tabletas",
        "molecule": "Ibuprofeno",
        "presentation": "Caja x 30 tabletas",
        "concentration": "400 mg",
        "laboratory": "La Santé",
        "price": 6900,
        "requires_prescription": False,
    },
    {
        "code": "MED-0004",
        "name": "Losartán 50 mg tabletas",
        "molecule": "Losartán",
        "presentation": "Caja x 30 tabletas",
        "concentration": "50 mg",
        "laboratory": "Tecnoquímicas",
        "price": 9800,
        "min_stock": 20,
        "max_stock": 400,
    },
    {
        "code": "MED-0005",
        "name": "Clonazepam 2 mg tabletas",
        "molecule": "Clonazepam",
        "presentation": "Caja x 30 tabletas",
        "concentration": "2 mg",
        "laboratory": "Roche",
        "price": 15400,
        "is_controlled": True,
    },
    {
        "code": "INS-0001",
        "name": "Jeringa desechable 5 ml",
        "presentation": "Unidad",
        "price": 450,
        "requires_prescription": False,
    },
]

# (code, name, type, eps code or None)
SEED_WAREHOUSES = [
    ("BOD-PRINCIPAL", "Bodega Principal", "PRINCIPAL", None),
    ("DISP-CENTRO", "Dispensario Centro", "DISPENSARIO", None),
    ("EPS005-NORTE", "Sanitas Norte", "EPS", "EPS005"),
    ("EPS037-SUR", "Nueva EPS Sur", "EPS", "EPS037"),
]


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create tables and seed the default organization, EPS, products and warehouses."
    )
    parser.add_argument(
        "--owner-user-id",
        default="seed-admin",
        help="User id recorded as OWNER of the default organization.",
    )
    return parser.parse_args(argv)


def seed(session: Session, *, owner_user_id: str = "seed-admin") -> Dict[str, Dict[str, int]]:
    """
    Seed the catalog through the repositories. Existing rows (matched by slug
    or code) are left untouched and counted as skipped.
    """
    created = {"organizations": 0, "members": 0, "eps": 0, "products": 0, "warehouses": 0}
    skipped = {"organizations": 0, "members": 0, "eps": 0, "products": 0, "warehouses": 0}

    orgs = SqlAlchemyOrganizationRepo(session)
    org = orgs.get_by_slug(DEFAULT_ORG_SLUG)
    if org is None:
        org = orgs.create_organization(DEFAULT_ORG_NAME, slug=DEFAULT_ORG_SLUG)
        created["organizations"] += 1
        orgs.add_member(org.id, owner_user_id, role="OWNER")
        created["members"] += 1
    else:
        skipped["organizations"] += 1

    eps_repo = SqlAlchemyEpsRepo(session)
    eps_ids: Dict[str, int] = {}
    for item in SEED_EPS:
        eps = eps_repo.get_by_code(item["code"], organization_id=org.id)
        if eps is None:
            eps = eps_repo.create_eps(organization_id=org.id, **item)
            created["eps"] += 1
        else:
            skipped["eps"] += 1
        eps_ids[eps.code] = eps.id

    products = SqlAlchemyProductRepo(session)
    for item in SEED_PRODUCTS:
        if products.get_by_code(item["code"]) is None:
            products.create_product(**item)
            created["products"] += 1
        else:
            skipped["products"] += 1

    warehouses = SqlAlchemyWarehouseRepo(session)
    for code, name, warehouse_type, eps_code in SEED_WAREHOUSES:
        if warehouses.get_by_code(code) is None:
            warehouses.create_warehouse(
                code=code,
                name=name,
                warehouse_type=warehouse_type,
                eps_id=eps_ids.get(eps_code) if eps_code else None,
            )
            created["warehouses"] += 1
        else:
            skipped["warehouses"] += 1

    return {"created": created, "skipped": skipped}


def main(argv: List[str] | None = None) -> int:
    """
    Main entrypoint for the CLI.

    Returns:
        Process exit code (0 for success, non-zero for error).
    """
    args = _parse_args(argv)
    init_logging()
    try:
        Base.metadata.create_all(bind=engine)
        with SessionLocal() as session:
            summary = seed(session, owner_user_id=args.owner_user_id)
    except Exception as exc:
        log.exception("seed failed")
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
