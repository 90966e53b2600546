# src/hitcounter/schemas/__init__.py
"""Pydantic schemas for request/response validation."""

from .account import (
    AccountCredentials,
    RegisterRequest,
    RegisterResponse,
    SiteCreatedResponse,
    SiteSummaryResponse,
)
from .counter import CounterRequest, CounterResponse
from .health import HealthResponse

__all__ = [
    "AccountCredentials",
    "CounterRequest",
    "CounterResponse",
    "HealthResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SiteCreatedResponse",
    "SiteSummaryResponse",
]
