# src/hitcounter/scripts/provision_admin.py
"""
Provision the admin secret that gates account registration.

Writes the ``admin_pass`` key with a create-if-absent write, so an existing
secret is never replaced. Usage:

    python -m hitcounter.scripts.provision_admin <secret>
"""

import argparse
import asyncio
import sys

from hitcounter.services import keys
from hitcounter.services.store import KeyValueStore, close_store, get_store


async def provision_admin_secret(store: KeyValueStore, secret: str) -> bool:
    """Store ``secret`` as the admin secret unless one already exists.

    Returns:
        True if the secret was written, False if one was already present.
    """
    keys.require("secret", secret)
    return await store.set_if_absent(keys.ADMIN_SECRET_KEY, secret)


async def _main(secret: str) -> int:
    try:
        created = await provision_admin_secret(get_store(), secret)
    finally:
        await close_store()
    if not created:
        print("Admin secret already provisioned; leaving it unchanged")
        return 1
    print("Admin secret provisioned")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("secret", help="Admin secret to store")
    args = parser.parse_args()
    sys.exit(asyncio.run(_main(args.secret)))
