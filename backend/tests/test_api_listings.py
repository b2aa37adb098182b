import os
import sys

from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dispensary.api.routes.eps import router as eps_router  # noqa: E402
from dispensary.api.routes.organizations import router as organizations_router  # noqa: E402
from dispensary.api.routes.products import router as products_router  # noqa: E402
from dispensary.api.routes.warehouses import router as warehouses_router  # noqa: E402
from dispensary.core.deps import (  # noqa: E402
    get_eps_lister,
    get_molecule_lister,
    get_organization_lister,
    get_product_search,
    get_warehouse_lister,
)
from dispensary.core.errors import register_exception_handlers  # noqa: E402
from dispensary.services.eps_lister import EpsLister  # noqa: E402
from dispensary.services.molecule_lister import MoleculeLister  # noqa: E402
from dispensary.services.organization_lister import OrganizationLister  # noqa: E402
from dispensary.services.product_search import ProductSearch  # noqa: E402
from dispensary.services.warehouse_lister import WarehouseLister  # noqa: E402

from tests.fakes import (  # noqa: E402
    FailingRepo,
    FakeEpsRepo,
    FakeOrganizationRepo,
    FakeProductRepo,
    FakeWarehouseRepo,
)


def _make_app(*, organizations=None, eps=None, products=None, warehouses=None) -> TestClient:
    app = FastAPI()
    for r in (organizations_router, eps_router, products_router, warehouses_router):
        app.include_router(r)
    register_exception_handlers(app)

    # Override dependencies to inject in-test fakes
    if organizations is not None:
        app.dependency_overrides[get_organization_lister] = lambda: OrganizationLister(organizations)
    if eps is not None:
        app.dependency_overrides[get_eps_lister] = lambda: EpsLister(eps)
    if products is not None:
        app.dependency_overrides[get_molecule_lister] = lambda: MoleculeLister(products)
        app.dependency_overrides[get_product_search] = lambda: ProductSearch(products)
    if warehouses is not None:
        app.dependency_overrides[get_warehouse_lister] = lambda: WarehouseLister(warehouses)
    return TestClient(app, raise_server_exceptions=False)


# -------------------------------
# Organizations
# -------------------------------

def test_list_organizations_shape():
    repo = FakeOrganizationRepo()
    org = repo.add("Farmacia Sur", "farmacia-sur", members=["u1", "u2"])
    client = _make_app(organizations=repo)

    resp = client.get("/api/organizations/list")

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["count"] == len(data["organizations"]) == 1
    item = data["organizations"][0]
    assert set(item) == {"id", "name", "slug", "createdAt", "_count"}
    assert item["id"] == org.id
    assert item["slug"] == "farmacia-sur"
    assert item["_count"] == {"members": 2}
    assert item["createdAt"].startswith("2024-05-01T12:00:00")


def test_list_organizations_store_failure():
    client = _make_app(organizations=FailingRepo())

    resp = client.get("/api/organizations/list")

    assert resp.status_code == 500
    body = resp.json()
    assert body == {"error": "Error listando organizaciones", "count": 0, "organizations": []}


# -------------------------------
# EPS
# -------------------------------

def test_list_eps_orders_and_filters():
    repo = FakeEpsRepo()
    a = repo.add("A", "Sanitas")
    b = repo.add("B", "Nueva EPS")
    repo.add("C", "Caducada", is_active=False)
    client = _make_app(eps=repo)

    resp = client.get("/api/eps/list")

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "eps": [
            {"id": b.id, "code": "B", "name": "Nueva EPS"},
            {"id": a.id, "code": "A", "name": "Sanitas"},
        ]
    }


def test_list_eps_store_failure_keeps_shape():
    client = _make_app(eps=FailingRepo())

    resp = client.get("/api/eps/list")

    assert resp.status_code == 500
    body = resp.json()
    assert body == {"error": "Error listando EPS", "eps": []}
    assert FailingRepo.SECRET not in resp.text


# -------------------------------
# Molecules
# -------------------------------

def test_list_molecules_is_bare_array():
    repo = FakeProductRepo(sloppy=True)
    repo.add("P1", "Ibuprofeno 400", molecule="Ibuprofeno")
    repo.add("P2", "Ibuprofeno 800", molecule="Ibuprofeno")
    repo.add("P3", "Jeringa", molecule=None)
    repo.add("P4", "Gasa", molecule="")
    repo.add("P5", "Amoxicilina 500", molecule="Amoxicilina", is_active=False)
    client = _make_app(products=repo)

    resp = client.get("/api/products/molecules")

    assert resp.status_code == 200, resp.text
    assert resp.json() == ["Ibuprofeno"]


def test_list_molecules_store_failure():
    client = _make_app(products=FailingRepo())

    resp = client.get("/api/products/molecules")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Error fetching molecules"}


# -------------------------------
# Product search
# -------------------------------

def test_search_products_passes_query_params():
    repo = FakeProductRepo()
    repo.add("MED-1", "Amoxicilina 500 mg", molecule="Amoxicilina", price=12300.0, requires_prescription=True)
    repo.add("MED-2", "Ibuprofeno 400 mg", molecule="Ibuprofeno", requires_prescription=False)
    client = _make_app(products=repo)

    resp = client.get("/api/products", params={"search": "ibu", "isActive": "true", "limit": 5, "offset": 0})

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["total"] == 1
    product = data["products"][0]
    assert product["code"] == "MED-2"
    assert product["requiresPrescription"] is False
    assert product["isActive"] is True
    assert repo.last_search == {"search": "ibu", "is_active": True, "offset": 0, "limit": 5}


def test_search_products_filters_by_is_active():
    repo = FakeProductRepo()
    repo.add("MED-1", "Amoxicilina 500 mg", molecule="Amoxicilina")
    repo.add("MED-2", "Amoxicilina 250 mg", molecule="Amoxicilina", is_active=False)
    client = _make_app(products=repo)

    resp = client.get("/api/products?isActive=true")

    assert resp.status_code == 200, resp.text
    assert resp.json()["total"] == 1
    assert [p["code"] for p in resp.json()["products"]] == ["MED-1"]
    assert repo.last_search["is_active"] is True


def test_search_products_rejects_oversized_limit():
    client = _make_app(products=FakeProductRepo())

    resp = client.get("/api/products", params={"limit": 100000})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "validation_error"


def test_search_products_rejects_negative_offset():
    client = _make_app(products=FakeProductRepo())

    resp = client.get("/api/products", params={"offset": -1})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "validation_error"


def test_search_products_store_failure():
    client = _make_app(products=FailingRepo())

    resp = client.get("/api/products")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Error listando productos", "products": [], "total": 0}


# -------------------------------
# Warehouses
# -------------------------------

def test_list_warehouses_with_type_filter():
    repo = FakeWarehouseRepo()
    repo.add("EPS005-NORTE", "Sanitas Norte", type="EPS", eps_id=7)
    repo.add("BOD-1", "Bodega Principal")
    client = _make_app(warehouses=repo)

    resp = client.get("/api/warehouses", params={"type": "EPS"})

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "warehouses": [
            {"id": 1, "code": "EPS005-NORTE", "name": "Sanitas Norte", "type": "EPS", "epsId": 7, "address": None}
        ]
    }


def test_list_warehouses_with_eps_code_filter():
    repo = FakeWarehouseRepo()
    repo.add("EPS005-NORTE", "Sanitas Norte", type="EPS", eps_id=7)
    repo.add("EPS037-SUR", "Nueva EPS Sur", type="EPS")
    repo.add("BOD-1", "Bodega Principal")
    client = _make_app(warehouses=repo)

    resp = client.get("/api/warehouses?epsCode=EPS005")

    assert resp.status_code == 200, resp.text
    assert [w["code"] for w in resp.json()["warehouses"]] == ["EPS005-NORTE"]


def test_list_warehouses_store_failure():
    client = _make_app(warehouses=FailingRepo())

    resp = client.get("/api/warehouses")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Error listando bodegas", "warehouses": []}
