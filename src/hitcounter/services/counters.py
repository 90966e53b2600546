"""Page-level hit counters."""

from __future__ import annotations

from hitcounter.core.errors import NotFoundError, StoreError
from hitcounter.services import keys
from hitcounter.services.store import KeyValueStore


class CounterEngine:
    """Atomically increments and reads page counters.

    The identifier triple is the only credential required here; no account
    secret is checked.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @staticmethod
    def _validate(
        account_id: str | None, site_id: str | None, page_id: str | None
    ) -> tuple[str, str, str]:
        return (
            keys.require_segment("accountid", account_id),
            keys.require_segment("siteid", site_id),
            keys.require("pageid", page_id),
        )

    async def increment(
        self, account_id: str | None, site_id: str | None, page_id: str | None
    ) -> int:
        """Add one hit to a page and return the post-increment value.

        The page counter and the site total move together in one store
        transaction, so the total never lags behind its pages.
        """
        account, site, page = self._validate(account_id, site_id, page_id)
        page_count, _site_total = await self._store.atomic_increment_many(
            [keys.page_counter_key(account, site, page), keys.site_total_key(account, site)]
        )
        return page_count

    async def read(self, account_id: str | None, site_id: str | None, page_id: str | None) -> int:
        """Return the current hit count for a page."""
        account, site, page = self._validate(account_id, site_id, page_id)
        value = await self._store.get(keys.page_counter_key(account, site, page))
        if value is None:
            raise NotFoundError("Counter not found")
        try:
            return int(value)
        except ValueError as err:
            raise StoreError() from err
