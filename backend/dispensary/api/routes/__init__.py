"""Collection of API route modules (organizations, eps, products, warehouses)."""

__all__ = [
    "organizations",
    "eps",
    "products",
    "warehouses",
]
