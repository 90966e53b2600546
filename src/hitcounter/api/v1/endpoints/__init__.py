# src/hitcounter/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .counter import router as counter_router
from .sites import router as sites_router

__all__ = [
    "admin_router",
    "counter_router",
    "sites_router",
]
