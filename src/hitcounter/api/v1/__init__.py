# src/hitcounter/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import admin_router, counter_router, sites_router

__all__ = [
    "admin_router",
    "counter_router",
    "sites_router",
]
