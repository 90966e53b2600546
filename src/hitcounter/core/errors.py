# src/hitcounter/core/errors.py
"""Typed failures raised by the hit counter core.

Every core operation either returns its value or raises exactly one of the
exceptions below. The HTTP layer maps them onto status codes in one place
(see ``hitcounter.main``).
"""

from __future__ import annotations


class HitCounterError(RuntimeError):
    """Base exception for all hit counter failures."""

    status_code: int = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(HitCounterError):
    """Raised when a required field is missing or malformed."""

    status_code = 400


class AuthError(HitCounterError):
    """Raised when a presented secret does not match."""

    status_code = 403


class NotFoundError(HitCounterError):
    """Raised when the referenced entity does not exist."""

    status_code = 404


class ConflictError(HitCounterError):
    """Raised when a create-if-absent write finds the key already present."""

    status_code = 409


class StoreError(HitCounterError):
    """Raised when the key-value store is unreachable or misbehaves.

    The detail is always generic; the underlying exception is chained for
    server-side logging only.
    """

    status_code = 500

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(detail)
