"""
Shared API router.

- Aggregates sub-routers from dispensary.api.routes.* modules.
- Uses no top-level prefix; each sub-router owns its /api/... prefix.

Sub-routers included:
- dispensary.api.routes.organizations -> /api/organizations
- dispensary.api.routes.eps           -> /api/eps
- dispensary.api.routes.products      -> /api/products
- dispensary.api.routes.warehouses    -> /api/warehouses
"""

from __future__ import annotations

import importlib
from typing import List

from fastapi import APIRouter

__all__ = ["router", "INCLUDED_MODULES", "ROUTE_MODULES"]

ROUTE_MODULES = [
    "dispensary.api.routes.organizations",
    "dispensary.api.routes.eps",
    "dispensary.api.routes.products",
    "dispensary.api.routes.warehouses",
]

router = APIRouter()


def _include_subrouter(parent: APIRouter, module_path: str) -> APIRouter:
    """
    Import a route module and include its `router`.
    """
    module = importlib.import_module(module_path)
    sub = getattr(module, "router", None)
    if not isinstance(sub, APIRouter):
        raise TypeError(f"{module_path} does not define an APIRouter named 'router'")
    parent.include_router(sub)
    return sub


def _include_known_subrouters(parent: APIRouter) -> List[str]:
    included: List[str] = []
    for mod in ROUTE_MODULES:
        _include_subrouter(parent, mod)
        included.append(mod)
    return included


INCLUDED_MODULES = _include_known_subrouters(router)
