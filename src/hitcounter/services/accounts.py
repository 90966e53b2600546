"""Account registration and credential checks."""

from __future__ import annotations

import asyncio
import logging

from hitcounter.core import security
from hitcounter.core.errors import AuthError, ConflictError, NotFoundError
from hitcounter.services import keys
from hitcounter.services.store import KeyValueStore
from hitcounter.utils.ids import IdGenerator, new_id

logger = logging.getLogger(__name__)


class AccountAuthority:
    """Registers accounts (admin-gated) and verifies account secrets."""

    def __init__(
        self,
        store: KeyValueStore,
        admin_secret: str | None,
        id_generator: IdGenerator = new_id,
    ) -> None:
        self._store = store
        self._admin_secret = admin_secret
        self._new_id = id_generator

    async def register_account(
        self,
        admin_secret_presented: str | None,
        new_account_secret: str | None,
    ) -> str:
        """Create a new account and return its identifier.

        Raises:
            ValidationError: If either secret is missing.
            AuthError: If the admin secret does not match.
            ConflictError: If the generated identifier is already taken.
        """
        presented = keys.require("authentication", admin_secret_presented)
        secret = keys.require("password", new_account_secret)

        # No configured admin secret means registration is closed.
        if not self._admin_secret or not security.secrets_match(presented, self._admin_secret):
            logger.warning("Rejected account registration with invalid admin secret")
            raise AuthError("Forbidden")

        account_id = self._new_id()
        password_hash = await asyncio.to_thread(security.hash_secret, secret)
        if not await self._store.set_if_absent(keys.account_key(account_id), password_hash):
            logger.error("Account id collision on %s", account_id)
            raise ConflictError("Account already exists")

        logger.info("Registered account %s", account_id)
        return account_id

    async def authenticate(self, account_id: str | None, presented_secret: str | None) -> str:
        """Verify an account secret, raising on any failure.

        Returns:
            The validated account identifier.

        Raises:
            ValidationError: If an input is missing or malformed.
            NotFoundError: If the account does not exist.
            AuthError: If the secret does not match.
        """
        account = keys.require_segment("accountid", account_id)
        secret = keys.require("authentication", presented_secret)

        password_hash = await self._store.get(keys.account_key(account))
        if password_hash is None:
            raise NotFoundError("Account not found")

        if not await asyncio.to_thread(security.verify_secret, secret, password_hash):
            logger.warning("Rejected credentials for account %s", account)
            raise AuthError("Forbidden")
        return account


async def resolve_admin_secret(store: KeyValueStore, configured: str | None) -> str | None:
    """Return the admin secret for this process.

    The configured value wins; otherwise the pre-provisioned ``admin_pass``
    key is read once. The result is fixed for the lifetime of the process.
    """
    if configured:
        return configured
    stored = await store.get(keys.ADMIN_SECRET_KEY)
    if not stored:
        logger.warning("No admin secret configured; account registration is disabled")
    return stored
