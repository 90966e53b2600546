# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ADMIN_SECRET", "A")
# Cheapest argon2id parameters keep the suite fast.
os.environ.setdefault("PWHASH_OPSLIMIT", "1")
os.environ.setdefault("PWHASH_MEMLIMIT", "8192")

from hitcounter.api.v1.dependencies import get_store_dep
from hitcounter.main import app as fastapi_app
from hitcounter.services.accounts import AccountAuthority
from hitcounter.services.aggregator import Aggregator
from hitcounter.services.counters import CounterEngine
from hitcounter.services.sites import SiteRegistry
from hitcounter.services.store import MemoryStore

ADMIN_SECRET = "A"


@pytest.fixture()
def store() -> MemoryStore:
    """Return an empty in-process store."""
    return MemoryStore()


@pytest.fixture()
def accounts(store: MemoryStore) -> AccountAuthority:
    return AccountAuthority(store, ADMIN_SECRET)


@pytest.fixture()
def sites(store: MemoryStore, accounts: AccountAuthority) -> SiteRegistry:
    return SiteRegistry(store, accounts)


@pytest.fixture()
def counters(store: MemoryStore) -> CounterEngine:
    return CounterEngine(store)


@pytest.fixture()
def aggregator(store: MemoryStore, accounts: AccountAuthority, sites: SiteRegistry) -> Aggregator:
    return Aggregator(store, accounts, sites)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_store_dependency(app: FastAPI, store: MemoryStore) -> Iterator[None]:
    app.dependency_overrides[get_store_dep] = lambda: store
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_store_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def registered_account(client: TestClient) -> dict[str, str]:
    """Register an account through the API and return its credentials."""
    response = client.post(
        "/api/v1/admin/register",
        json={"authentication": ADMIN_SECRET, "password": "s1"},
    )
    assert response.status_code == 201
    return {"accountid": response.json()["accountid"], "authentication": "s1"}


@pytest.fixture()
def provisioned_site(client: TestClient, registered_account: dict[str, str]) -> dict[str, str]:
    """Provision a site for the registered account and return the full triple base."""
    response = client.post("/api/v1/sites", json=registered_account)
    assert response.status_code == 201
    return {"accountid": registered_account["accountid"], "siteid": response.json()["siteid"]}
