"""Store liveness reporting."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hitcounter.core.errors import StoreError
from hitcounter.services.store import KeyValueStore, StoreStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthReport:
    """Snapshot of the store connection."""

    store_status: StoreStatus
    ping_ms: float | None


class HealthReporter:
    """Best-effort probe of the key-value store; never raises."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def health(self) -> HealthReport:
        try:
            elapsed = await self._store.ping()
        except StoreError:
            logger.warning("Store ping failed")
            return HealthReport(store_status=StoreStatus.DISCONNECTED, ping_ms=None)
        return HealthReport(
            store_status=self._store.connection_status(),
            ping_ms=round(elapsed * 1000, 3),
        )
