# src/hitcounter/services/__init__.py
"""Business logic services for the hit counter."""

from .accounts import AccountAuthority
from .aggregator import Aggregator, SiteSummary
from .counters import CounterEngine
from .health import HealthReport, HealthReporter
from .sites import SiteRegistry
from .store import KeyValueStore, MemoryStore, RedisStore, StoreStatus

__all__ = [
    "AccountAuthority",
    "Aggregator",
    "CounterEngine",
    "HealthReport",
    "HealthReporter",
    "KeyValueStore",
    "MemoryStore",
    "RedisStore",
    "SiteRegistry",
    "SiteSummary",
    "StoreStatus",
]
