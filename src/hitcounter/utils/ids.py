# src/hitcounter/utils/ids.py
"""Identifier generation for accounts and sites."""

from __future__ import annotations

import uuid
from collections.abc import Callable

IdGenerator = Callable[[], str]


def new_id() -> str:
    """Return a random version-4 UUID string."""
    return str(uuid.uuid4())
