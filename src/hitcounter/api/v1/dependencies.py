"""Shared API dependencies wiring the services onto the store handle."""

from typing import Annotated

from fastapi import Depends, Request

from hitcounter.services.accounts import AccountAuthority
from hitcounter.services.aggregator import Aggregator
from hitcounter.services.counters import CounterEngine
from hitcounter.services.health import HealthReporter
from hitcounter.services.sites import SiteRegistry
from hitcounter.services.store import KeyValueStore, get_store


def get_store_dep() -> KeyValueStore:
    return get_store()


StoreDep = Annotated[KeyValueStore, Depends(get_store_dep)]


def get_admin_secret(request: Request) -> str | None:
    """Return the admin secret resolved at application startup."""
    return getattr(request.app.state, "admin_secret", None)


AdminSecretDep = Annotated[str | None, Depends(get_admin_secret)]


def get_account_authority(store: StoreDep, admin_secret: AdminSecretDep) -> AccountAuthority:
    return AccountAuthority(store, admin_secret)


AccountAuthorityDep = Annotated[AccountAuthority, Depends(get_account_authority)]


def get_site_registry(store: StoreDep, accounts: AccountAuthorityDep) -> SiteRegistry:
    return SiteRegistry(store, accounts)


SiteRegistryDep = Annotated[SiteRegistry, Depends(get_site_registry)]


def get_counter_engine(store: StoreDep) -> CounterEngine:
    return CounterEngine(store)


CounterEngineDep = Annotated[CounterEngine, Depends(get_counter_engine)]


def get_aggregator(
    store: StoreDep, accounts: AccountAuthorityDep, sites: SiteRegistryDep
) -> Aggregator:
    return Aggregator(store, accounts, sites)


AggregatorDep = Annotated[Aggregator, Depends(get_aggregator)]


def get_health_reporter(store: StoreDep) -> HealthReporter:
    return HealthReporter(store)


HealthReporterDep = Annotated[HealthReporter, Depends(get_health_reporter)]
