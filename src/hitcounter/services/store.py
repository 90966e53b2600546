"""Key-value store adapters for the hit counter.

Two backends implement the same narrow contract:

- ``RedisStore`` wraps a ``redis.asyncio`` client and is used in production.
- ``MemoryStore`` keeps everything in-process behind a lock; it backs the
  test-suite and single-process local development.

The core only ever talks to :class:`KeyValueStore`, so the backend is chosen
purely by configuration (``STORE_BACKEND``).
"""

from __future__ import annotations

import fnmatch
import logging
import time
from collections.abc import Sequence
from enum import Enum
from threading import Lock
from typing import Protocol

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from hitcounter.core.errors import StoreError
from hitcounter.core.settings import settings

logger = logging.getLogger(__name__)

_SCAN_BATCH = 500


class StoreStatus(str, Enum):
    """Connection state of the underlying store."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"


class KeyValueStore(Protocol):
    """Primitives the core relies on."""

    async def get(self, key: str) -> str | None: ...

    async def set_if_absent(self, key: str, value: str) -> bool: ...

    async def atomic_increment(self, key: str) -> int: ...

    async def atomic_increment_many(self, keys: Sequence[str]) -> list[int]: ...

    async def keys_matching(self, pattern: str) -> set[str]: ...

    async def ping(self) -> float: ...

    def connection_status(self) -> StoreStatus: ...

    async def close(self) -> None: ...


class RedisStore:
    """Store adapter backed by a shared ``redis.asyncio`` connection pool."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client
        self._status = StoreStatus.CONNECTING

    @classmethod
    def from_settings(cls) -> RedisStore:
        """Build an adapter from the application settings."""
        client = redis.from_url(
            settings.redis_url,
            password=settings.redis_password,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_connect_timeout,
            decode_responses=True,
        )
        return cls(client)

    def _failed(self, operation: str, err: RedisError) -> StoreError:
        if isinstance(err, (RedisConnectionError, RedisTimeoutError)):
            self._status = StoreStatus.DISCONNECTED
        logger.error("Redis %s failed: %s", operation, err)
        return StoreError()

    def _succeeded(self) -> None:
        self._status = StoreStatus.CONNECTED

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as err:
            raise self._failed("GET", err) from err
        self._succeeded()
        return value

    async def set_if_absent(self, key: str, value: str) -> bool:
        """SET NX; True when the key was created by this call."""
        try:
            created = await self._client.set(key, value, nx=True)
        except RedisError as err:
            raise self._failed("SET NX", err) from err
        self._succeeded()
        return bool(created)

    async def atomic_increment(self, key: str) -> int:
        try:
            value = await self._client.incr(key)
        except RedisError as err:
            raise self._failed("INCR", err) from err
        self._succeeded()
        return int(value)

    async def atomic_increment_many(self, keys: Sequence[str]) -> list[int]:
        """INCR every key inside one MULTI/EXEC transaction."""
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for key in keys:
                    pipe.incr(key)
                values = await pipe.execute()
        except RedisError as err:
            raise self._failed("MULTI INCR", err) from err
        self._succeeded()
        return [int(value) for value in values]

    async def keys_matching(self, pattern: str) -> set[str]:
        """Enumerate keys with SCAN so large keyspaces never block the server."""
        try:
            keys = {key async for key in self._client.scan_iter(match=pattern, count=_SCAN_BATCH)}
        except RedisError as err:
            raise self._failed("SCAN", err) from err
        self._succeeded()
        return keys

    async def ping(self) -> float:
        """Return the PING round-trip time in seconds."""
        started = time.perf_counter()
        try:
            await self._client.ping()
        except RedisError as err:
            raise self._failed("PING", err) from err
        self._succeeded()
        return time.perf_counter() - started

    def connection_status(self) -> StoreStatus:
        return self._status

    async def close(self) -> None:
        await self._client.aclose()
        self._status = StoreStatus.DISCONNECTED


class MemoryStore:
    """In-process store with the same atomicity guarantees as Redis.

    Each primitive runs entirely under one lock and never awaits while
    holding it, so concurrent coroutines (or threads) cannot interleave
    inside a single operation.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = Lock()

    async def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    async def set_if_absent(self, key: str, value: str) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True

    def _incr_locked(self, key: str) -> int:
        current = self._data.get(key, "0")
        try:
            value = int(current) + 1
        except ValueError as err:
            raise StoreError() from err
        self._data[key] = str(value)
        return value

    async def atomic_increment(self, key: str) -> int:
        with self._lock:
            return self._incr_locked(key)

    async def atomic_increment_many(self, keys: Sequence[str]) -> list[int]:
        with self._lock:
            return [self._incr_locked(key) for key in keys]

    async def keys_matching(self, pattern: str) -> set[str]:
        with self._lock:
            return {key for key in self._data if fnmatch.fnmatchcase(key, pattern)}

    async def ping(self) -> float:
        return 0.0

    def connection_status(self) -> StoreStatus:
        return StoreStatus.CONNECTED

    async def close(self) -> None:
        return None

    def clear(self) -> None:
        """Drop every key (used to isolate tests)."""
        with self._lock:
            self._data.clear()


class _StoreSingleton:
    """Process-wide store handle shared by all requests."""

    _instance: KeyValueStore | None = None

    @classmethod
    def get_instance(cls) -> KeyValueStore:
        if cls._instance is None:
            if settings.store_backend == "memory":
                cls._instance = MemoryStore()
            else:
                cls._instance = RedisStore.from_settings()
            logger.info("Using %s key-value store", settings.store_backend)
        return cls._instance

    @classmethod
    async def close(cls) -> None:
        if cls._instance is not None:
            await cls._instance.close()
            cls._instance = None


def get_store() -> KeyValueStore:
    """Return the singleton store adapter."""
    return _StoreSingleton.get_instance()


async def close_store() -> None:
    """Close the singleton store adapter, if one was created."""
    await _StoreSingleton.close()
