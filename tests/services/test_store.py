# tests/services/test_store.py
"""Tests for the key-value store adapters."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from hitcounter.core.errors import StoreError
from hitcounter.services.store import MemoryStore, RedisStore, StoreStatus


def _redis_client() -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock()
    client.set = AsyncMock()
    client.incr = AsyncMock()
    client.ping = AsyncMock()
    client.aclose = AsyncMock()
    return client


class TestMemoryStore:
    @pytest.mark.asyncio
    async def test_set_if_absent_only_creates_once(self) -> None:
        store = MemoryStore()

        assert await store.set_if_absent("k", "first") is True
        assert await store.set_if_absent("k", "second") is False
        assert await store.get("k") == "first"

    @pytest.mark.asyncio
    async def test_increment_starts_from_zero(self) -> None:
        store = MemoryStore()

        assert await store.atomic_increment("hits") == 1
        assert await store.atomic_increment("hits") == 2
        assert await store.get("hits") == "2"

    @pytest.mark.asyncio
    async def test_increment_many_returns_each_value(self) -> None:
        store = MemoryStore()
        await store.atomic_increment("b")

        assert await store.atomic_increment_many(["a", "b"]) == [1, 2]

    @pytest.mark.asyncio
    async def test_increment_of_non_integer_raises_store_error(self) -> None:
        store = MemoryStore()
        await store.set_if_absent("k", "text")

        with pytest.raises(StoreError):
            await store.atomic_increment("k")

    @pytest.mark.asyncio
    async def test_keys_matching_uses_glob_patterns(self) -> None:
        store = MemoryStore()
        for key in ("site:a:1", "site:a:2", "site:b:1", "counter:a:1"):
            await store.set_if_absent(key, "0")

        assert await store.keys_matching("site:a:*") == {"site:a:1", "site:a:2"}

    @pytest.mark.asyncio
    async def test_concurrent_increments_do_not_lose_updates(self) -> None:
        store = MemoryStore()

        results = await asyncio.gather(*(store.atomic_increment("k") for _ in range(100)))

        assert sorted(results) == list(range(1, 101))

    def test_threaded_increments_do_not_lose_updates(self) -> None:
        store = MemoryStore()
        n = 400

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: asyncio.run(store.atomic_increment("k")), range(n)))

        assert sorted(results) == list(range(1, n + 1))
        assert asyncio.run(store.get("k")) == str(n)

    def test_threaded_increment_many_keeps_keys_in_step(self) -> None:
        store = MemoryStore()
        n = 400

        def _hit(_: int) -> list[int]:
            return asyncio.run(store.atomic_increment_many(["page", "site"]))

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(_hit, range(n)))

        # Both keys move together, so every pair carries the same value.
        assert all(page == site for page, site in results)
        assert sorted(page for page, _ in results) == list(range(1, n + 1))
        assert asyncio.run(store.get("page")) == str(n)
        assert asyncio.run(store.get("site")) == str(n)

    @pytest.mark.asyncio
    async def test_ping_and_status(self) -> None:
        store = MemoryStore()

        assert await store.ping() == 0.0
        assert store.connection_status() is StoreStatus.CONNECTED


class TestRedisStore:
    def test_status_starts_connecting(self) -> None:
        assert RedisStore(_redis_client()).connection_status() is StoreStatus.CONNECTING

    @pytest.mark.asyncio
    async def test_get_marks_connected(self) -> None:
        client = _redis_client()
        client.get.return_value = "3"
        store = RedisStore(client)

        assert await store.get("counter:a:s:p") == "3"
        client.get.assert_awaited_once_with("counter:a:s:p")
        assert store.connection_status() is StoreStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_set_if_absent_uses_nx(self) -> None:
        client = _redis_client()
        client.set.return_value = None
        store = RedisStore(client)

        assert await store.set_if_absent("account:x", "hash") is False
        client.set.assert_awaited_once_with("account:x", "hash", nx=True)

    @pytest.mark.asyncio
    async def test_atomic_increment(self) -> None:
        client = _redis_client()
        client.incr.return_value = 7
        store = RedisStore(client)

        assert await store.atomic_increment("k") == 7

    @pytest.mark.asyncio
    async def test_increment_many_runs_in_transaction(self) -> None:
        client = _redis_client()
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[4, 9])
        client.pipeline.return_value.__aenter__.return_value = pipe
        store = RedisStore(client)

        assert await store.atomic_increment_many(["page", "site"]) == [4, 9]
        client.pipeline.assert_called_once_with(transaction=True)
        assert [c.args for c in pipe.incr.call_args_list] == [("page",), ("site",)]

    @pytest.mark.asyncio
    async def test_keys_matching_scans(self) -> None:
        client = _redis_client()

        async def _scan(match: str, count: int):
            for key in ("site:a:1", "site:a:2"):
                yield key

        client.scan_iter = MagicMock(side_effect=_scan)
        store = RedisStore(client)

        assert await store.keys_matching("site:a:*") == {"site:a:1", "site:a:2"}
        assert client.scan_iter.call_args.kwargs["match"] == "site:a:*"

    @pytest.mark.asyncio
    async def test_connection_error_is_wrapped(self) -> None:
        client = _redis_client()
        client.get.side_effect = RedisConnectionError("connection refused by 10.0.0.5")
        store = RedisStore(client)

        with pytest.raises(StoreError) as exc_info:
            await store.get("k")

        assert exc_info.value.detail == "Internal server error"
        assert "10.0.0.5" not in str(exc_info.value)
        assert store.connection_status() is StoreStatus.DISCONNECTED

    @pytest.mark.asyncio
    async def test_response_error_keeps_connection_state(self) -> None:
        client = _redis_client()
        client.incr.side_effect = ResponseError("value is not an integer")
        store = RedisStore(client)

        with pytest.raises(StoreError):
            await store.atomic_increment("k")
        assert store.connection_status() is StoreStatus.CONNECTING

    @pytest.mark.asyncio
    async def test_ping_measures_round_trip(self) -> None:
        client = _redis_client()
        store = RedisStore(client)

        elapsed = await store.ping()

        assert elapsed >= 0.0
        assert store.connection_status() is StoreStatus.CONNECTED

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        client = _redis_client()
        store = RedisStore(client)

        await store.close()

        client.aclose.assert_awaited_once()
        assert store.connection_status() is StoreStatus.DISCONNECTED
