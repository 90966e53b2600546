"""Key-space layout shared by every component that touches the store."""

from __future__ import annotations

import re
from typing import Final

from hitcounter.core.errors import ValidationError

ADMIN_SECRET_KEY: Final[str] = "admin_pass"
SITE_PLACEHOLDER: Final[str] = "0"

# Namespace segments end up inside SCAN patterns, so separators and glob
# metacharacters are not allowed in them.
_NAMESPACE_SEGMENT = re.compile(r"^[^:*?\[\]\\\s]+$")


def require(field: str, value: str | None) -> str:
    """Return ``value`` or raise ``ValidationError`` when it is empty."""
    if value is None or not str(value):
        raise ValidationError(f"Missing required field: {field}")
    return str(value)


def require_segment(field: str, value: str | None) -> str:
    """Like :func:`require`, additionally rejecting pattern-unsafe characters."""
    checked = require(field, value)
    if not _NAMESPACE_SEGMENT.match(checked):
        raise ValidationError(f"Malformed identifier: {field}")
    return checked


def account_key(account_id: str) -> str:
    """Key holding an account's password hash."""
    return f"account:{account_id}"


def site_key(account_id: str, site_id: str) -> str:
    """Presence marker for a provisioned site."""
    return f"site:{account_id}:{site_id}"


def site_pattern(account_id: str) -> str:
    """SCAN pattern matching every site of an account."""
    return f"site:{account_id}:*"


def site_id_from_key(account_id: str, key: str) -> str:
    """Strip the ``site:{account_id}:`` prefix from a presence key."""
    return key[len(f"site:{account_id}:"):]


def page_counter_key(account_id: str, site_id: str, page_id: str) -> str:
    """Hit counter for a single page."""
    return f"counter:{account_id}:{site_id}:{page_id}"


def site_total_key(account_id: str, site_id: str) -> str:
    """Running total of hits across all pages of a site."""
    return f"counter:{account_id}:{site_id}"
