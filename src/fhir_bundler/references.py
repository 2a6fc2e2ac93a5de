"""Self-reference URLs (``fullUrl``) for bundle entries.

A UUID id is referenced as ``urn:uuid:<id>`` so that the receiving server
resolves references to it while processing the bundle. Any other id is a
stable, addressable ``<resourceType>/<id>``.
"""

import re
from typing import Any

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_self_reference_id(resource_id: Any) -> bool:
    """Return True if *resource_id* is a canonical 8-4-4-4-12 hex UUID.

    Never raises: empty, missing and non-string values are simply not UUIDs.
    """
    if not isinstance(resource_id, str) or not resource_id:
        return False
    return _UUID_PATTERN.fullmatch(resource_id) is not None


def full_url_for(resource_type: str, resource_id: str | None) -> str | None:
    """Derive the ``fullUrl`` of an entry, or None when the id is empty."""
    if not resource_id:
        return None
    if is_self_reference_id(resource_id):
        return f"urn:uuid:{resource_id}"
    return f"{resource_type}/{resource_id}"
