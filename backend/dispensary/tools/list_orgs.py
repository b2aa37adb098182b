"""
CLI to print every organization with its member count.

Prints the same JSON document as GET /api/organizations/list. Exits with 1
(and the error body on STDOUT) when the store query fails.

Usage:
  python -m dispensary.tools.list_orgs
"""

from __future__ import annotations

import json
import os
import sys

# Ensure the 'backend' directory is on sys.path so we can import dispensary modules
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, "..", ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dispensary.core.contracts import OrganizationRepo  # noqa: E402
from dispensary.core.logging import init_logging  # noqa: E402
from dispensary.services.organization_lister import OrganizationLister  # noqa: E402


def render(repo: OrganizationRepo) -> tuple[int, str]:
    """
    Return (exit_code, json_text) for the organizations held by `repo`.
    """
    result = OrganizationLister(repo).list()
    if not result.ok:
        body = {"error": result.error, "count": 0, "organizations": []}
        return 1, json.dumps(body, ensure_ascii=False)
    return 0, json.dumps(result.payload.model_dump(mode="json", by_alias=True), ensure_ascii=False)


def main() -> int:
    from dispensary.db.session import SessionLocal
    from dispensary.repos.organization_repo import SqlAlchemyOrganizationRepo

    init_logging()
    with SessionLocal() as session:
        code, text = render(SqlAlchemyOrganizationRepo(session))
    print(text)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
