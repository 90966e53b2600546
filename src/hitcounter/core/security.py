"""Credential hashing built on libsodium's argon2id primitives."""
from __future__ import annotations

import hmac

from nacl import pwhash
from nacl.exceptions import InvalidkeyError

from hitcounter.core.settings import settings


def hash_secret(secret: str) -> str:
    """Return a salted argon2id digest for ``secret``.

    A fresh random salt is drawn on every call, so two digests of the same
    secret differ while both verify against it.
    """
    digest = pwhash.argon2id.str(
        secret.encode("utf-8"),
        opslimit=settings.pwhash_opslimit,
        memlimit=settings.pwhash_memlimit,
    )
    return digest.decode("ascii")


def verify_secret(secret: str, digest: str) -> bool:
    """Verify ``secret`` against a digest produced by :func:`hash_secret`.

    Returns:
        True if the secret matches; False on mismatch or a malformed digest.
    """
    try:
        return bool(pwhash.verify(digest.encode("ascii"), secret.encode("utf-8")))
    except (InvalidkeyError, UnicodeEncodeError, ValueError):
        return False


def secrets_match(presented: str, expected: str) -> bool:
    """Constant-time comparison of two plaintext secrets."""
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))
