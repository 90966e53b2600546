"""Site provisioning and enumeration under an account namespace."""

from __future__ import annotations

import logging

from hitcounter.core.errors import ConflictError
from hitcounter.services import keys
from hitcounter.services.accounts import AccountAuthority
from hitcounter.services.store import KeyValueStore
from hitcounter.utils.ids import IdGenerator, new_id

logger = logging.getLogger(__name__)


class SiteRegistry:
    """Creates sites for authenticated accounts and lists existing ones."""

    def __init__(
        self,
        store: KeyValueStore,
        accounts: AccountAuthority,
        id_generator: IdGenerator = new_id,
    ) -> None:
        self._store = store
        self._accounts = accounts
        self._new_id = id_generator

    async def provision_site(self, account_id: str | None, account_secret: str | None) -> str:
        """Authenticate the account, then create and return a new site id."""
        account = await self._accounts.authenticate(account_id, account_secret)

        site_id = self._new_id()
        created = await self._store.set_if_absent(
            keys.site_key(account, site_id), keys.SITE_PLACEHOLDER
        )
        if not created:
            raise ConflictError("Site already exists")

        logger.info("Provisioned site %s for account %s", site_id, account)
        return site_id

    async def list_sites(self, account_id: str) -> set[str]:
        """Return every site id provisioned under ``account_id``."""
        account = keys.require_segment("accountid", account_id)
        found = await self._store.keys_matching(keys.site_pattern(account))
        return {keys.site_id_from_key(account, key) for key in found}
