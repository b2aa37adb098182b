"""Dispensary catalog API package root (explicit package marker)."""

__all__ = [
    "api",
    "core",
    "db",
    "models",
    "repos",
    "schemas",
    "services",
    "tools",
]
