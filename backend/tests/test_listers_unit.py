import logging
import os
import sys

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dispensary.services.eps_lister import EPS_ERROR, EpsLister  # noqa: E402
from dispensary.services.listing import ListingResult, run_listing  # noqa: E402
from dispensary.services.molecule_lister import MOLECULES_ERROR, MoleculeLister, normalize_molecules  # noqa: E402
from dispensary.services.organization_lister import ORGANIZATIONS_ERROR, OrganizationLister  # noqa: E402
from dispensary.services.product_search import PRODUCTS_ERROR, ProductSearch  # noqa: E402
from dispensary.services.warehouse_lister import WAREHOUSES_ERROR, WarehouseLister  # noqa: E402

from tests.fakes import (  # noqa: E402
    FailingRepo,
    FakeEpsRepo,
    FakeOrganizationRepo,
    FakeProductRepo,
    FakeWarehouseRepo,
)


# -------------------------------
# run_listing / ListingResult
# -------------------------------

def test_run_listing_success_carries_payload():
    result = run_listing("demo", lambda: [1, 2], "boom")
    assert result.ok is True
    assert result.payload == [1, 2]
    assert result.error is None


def test_run_listing_failure_logs_once_and_hides_detail(caplog):
    def query():
        raise RuntimeError("password authentication failed for user postgres")

    with caplog.at_level(logging.ERROR, logger="dispensary.services.listing"):
        result = run_listing("demo", query, "Generic failure")

    assert result == ListingResult.failure("Generic failure")
    assert result.ok is False
    assert result.payload is None
    records = [r for r in caplog.records if r.name == "dispensary.services.listing"]
    assert len(records) == 1
    assert records[0].listing == "demo"
    assert records[0].exc_info is not None


# -------------------------------
# OrganizationLister
# -------------------------------

def test_organization_lister_counts_members():
    repo = FakeOrganizationRepo()
    repo.add("Farmacia Sur", "farmacia-sur", members=["u1", "u2", "u3"])
    repo.add("Droguería Norte", "drogueria-norte")

    result = OrganizationLister(repo).list()

    assert result.ok
    payload = result.payload
    assert payload.count == len(payload.organizations) == 2
    by_slug = {o.slug: o for o in payload.organizations}
    assert by_slug["farmacia-sur"].count.members == 3
    assert by_slug["drogueria-norte"].count.members == 0


def test_organization_lister_empty_store():
    result = OrganizationLister(FakeOrganizationRepo()).list()
    assert result.ok
    assert result.payload.count == 0
    assert result.payload.organizations == []


def test_organization_lister_failure_is_guarded():
    result = OrganizationLister(FailingRepo()).list()
    assert not result.ok
    assert result.error == ORGANIZATIONS_ERROR


# -------------------------------
# EpsLister
# -------------------------------

def test_eps_lister_orders_by_name_and_excludes_inactive():
    repo = FakeEpsRepo()
    a = repo.add("A", "Sanitas")
    b = repo.add("B", "Nueva EPS")
    repo.add("C", "Caducada", is_active=False)

    result = EpsLister(repo).list()

    assert result.ok
    assert [e.id for e in result.payload.eps] == [b.id, a.id]
    assert [e.name for e in result.payload.eps] == ["Nueva EPS", "Sanitas"]
    assert result.payload.eps[0].model_dump() == {"id": b.id, "code": "B", "name": "Nueva EPS"}


def test_eps_lister_drops_inactive_rows_from_a_loose_repo():
    repo = FakeEpsRepo(sloppy=True)
    repo.add("A", "Sanitas")
    repo.add("C", "Caducada", is_active=False)

    result = EpsLister(repo).list()

    assert [e.code for e in result.payload.eps] == ["A"]


def test_eps_lister_failure_returns_generic_error():
    repo = FailingRepo()
    result = EpsLister(repo).list()
    assert not result.ok
    assert result.error == EPS_ERROR
    assert FailingRepo.SECRET not in result.error
    # No retries
    assert repo.calls == 1


# -------------------------------
# MoleculeLister
# -------------------------------

def test_molecule_lister_dedups_and_filters():
    repo = FakeProductRepo(sloppy=True)
    repo.add("P1", "Ibuprofeno 400", molecule="Ibuprofeno")
    repo.add("P2", "Ibuprofeno 800", molecule="Ibuprofeno")
    repo.add("P3", "Jeringa", molecule=None)
    repo.add("P4", "Gasa", molecule="")
    repo.add("P5", "Amoxicilina 500", molecule="Amoxicilina", is_active=False)

    result = MoleculeLister(repo).list()

    assert result.ok
    assert result.payload == ["Ibuprofeno"]


def test_molecule_lister_is_sorted_and_unique():
    repo = FakeProductRepo(sloppy=True)
    for i, molecule in enumerate(["Losartán", "Acetaminofén", "Losartán", "Clonazepam"]):
        repo.add(f"P{i}", f"Producto {i}", molecule=molecule)

    molecules = MoleculeLister(repo).list().payload

    assert molecules == ["Acetaminofén", "Clonazepam", "Losartán"]
    assert all(a <= b for a, b in zip(molecules, molecules[1:]))
    assert len(set(molecules)) == len(molecules)


def test_normalize_molecules_handles_empty_input():
    assert normalize_molecules([]) == []
    assert normalize_molecules([None, ""]) == []


def test_molecule_lister_failure():
    result = MoleculeLister(FailingRepo()).list()
    assert not result.ok
    assert result.error == MOLECULES_ERROR


# -------------------------------
# ProductSearch / WarehouseLister
# -------------------------------

def test_product_search_passes_filters_and_reports_total():
    repo = FakeProductRepo()
    repo.add("MED-1", "Amoxicilina 500 mg", molecule="Amoxicilina")
    repo.add("MED-2", "Amoxicilina 250 mg", molecule="Amoxicilina", is_active=False)
    repo.add("MED-3", "Ibuprofeno 400 mg", molecule="Ibuprofeno")

    result = ProductSearch(repo).search(search="amoxi", is_active=True, offset=0, limit=10)

    assert result.ok
    assert result.payload.total == 1
    assert [p.code for p in result.payload.products] == ["MED-1"]
    assert repo.last_search == {"search": "amoxi", "is_active": True, "offset": 0, "limit": 10}


def test_product_search_failure():
    result = ProductSearch(FailingRepo()).search()
    assert not result.ok
    assert result.error == PRODUCTS_ERROR


def test_warehouse_lister_filters_by_eps_code():
    repo = FakeWarehouseRepo()
    repo.add("EPS005-NORTE", "Sanitas Norte", type="EPS")
    repo.add("EPS037-SUR", "Nueva EPS Sur", type="EPS")
    repo.add("BOD-1", "Bodega Principal")

    result = WarehouseLister(repo).list(eps_code="EPS005")

    assert result.ok
    assert [w.code for w in result.payload.warehouses] == ["EPS005-NORTE"]


def test_warehouse_lister_failure():
    result = WarehouseLister(FailingRepo()).list()
    assert not result.ok
    assert result.error == WAREHOUSES_ERROR
