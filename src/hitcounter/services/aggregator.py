"""Per-account aggregation of site totals."""

from __future__ import annotations

import asyncio
import logging
from typing import NamedTuple

from hitcounter.core.errors import NotFoundError
from hitcounter.services import keys
from hitcounter.services.accounts import AccountAuthority
from hitcounter.services.sites import SiteRegistry
from hitcounter.services.store import KeyValueStore

logger = logging.getLogger(__name__)


class SiteSummary(NamedTuple):
    """A site id paired with its aggregate hit count."""

    site_id: str
    count: int


class Aggregator:
    """Collects one total per site for an authenticated account.

    Lookups run concurrently and are isolated from each other: a failed or
    missing total contributes ``0`` instead of failing the whole call.
    """

    def __init__(
        self,
        store: KeyValueStore,
        accounts: AccountAuthority,
        sites: SiteRegistry,
    ) -> None:
        self._store = store
        self._accounts = accounts
        self._sites = sites

    async def _site_total(self, account_id: str, site_id: str) -> SiteSummary:
        value = await self._store.get(keys.site_total_key(account_id, site_id))
        if value is None:
            return SiteSummary(site_id, 0)
        try:
            return SiteSummary(site_id, int(value))
        except ValueError:
            logger.warning("Non-integer total stored for site %s; reporting 0", site_id)
            return SiteSummary(site_id, 0)

    async def aggregate(
        self, account_id: str | None, account_secret: str | None
    ) -> list[SiteSummary]:
        """Return ``(site_id, count)`` for every site of the account.

        Raises:
            ValidationError, NotFoundError, AuthError: From authentication.
            NotFoundError: If the account has no sites.
            StoreError: If the site enumeration itself fails.
        """
        account = await self._accounts.authenticate(account_id, account_secret)

        site_ids = await self._sites.list_sites(account)
        if not site_ids:
            raise NotFoundError("No site IDs found for this account")

        ordered = sorted(site_ids)
        outcomes = await asyncio.gather(
            *(self._site_total(account, site_id) for site_id in ordered),
            return_exceptions=True,
        )

        summaries: list[SiteSummary] = []
        for site_id, outcome in zip(ordered, outcomes):
            if isinstance(outcome, SiteSummary):
                summaries.append(outcome)
            elif isinstance(outcome, Exception):
                logger.warning(
                    "Total lookup failed for site %s; reporting 0", site_id, exc_info=outcome
                )
                summaries.append(SiteSummary(site_id, 0))
            else:
                # Cancellation and other BaseExceptions are not absorbed.
                raise outcome
        return summaries
