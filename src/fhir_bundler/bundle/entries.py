"""Bundle entries for transaction and message bundles."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from fhir_bundler.bundle.models import BundleEntry
from fhir_bundler.errors import InvalidResourceError
from fhir_bundler.references import full_url_for
from fhir_bundler.resources import resource_id_of, resource_to_dict, resource_type_of

logger = logging.getLogger(__name__)


def build_transaction_entry(
    resource: BaseModel | dict[str, Any],
    use_stable_id: bool = False,
) -> BundleEntry:
    """Wrap a resource in a transaction entry.

    Args:
        resource: FHIR resource (Pydantic model or dict)
        use_stable_id: Upsert with ``PUT <type>/<id>`` instead of creating
            with ``POST <type>``

    Returns:
        Entry with ``request`` and, when the resource has an id, ``fullUrl``

    Raises:
        InvalidResourceError: If *use_stable_id* is set and the id is empty.
    """
    data = resource_to_dict(resource)
    resource_type = resource_type_of(data)
    resource_id = resource_id_of(data)

    if use_stable_id:
        if not resource_id:
            raise InvalidResourceError(
                f"Failed to use resource id for {resource_type}: empty identifier"
            )
        method = "PUT"
        url = f"{resource_type}/{resource_id}"
    else:
        method = "POST"
        url = resource_type

    entry = _plain_entry(data, resource_type, resource_id)
    entry["request"] = {"method": method, "url": url}
    return entry


def build_message_entry(resource: BaseModel | dict[str, Any]) -> BundleEntry:
    """Wrap a resource in a plain message-bundle entry (no ``request``)."""
    data = resource_to_dict(resource)
    return _plain_entry(data, resource_type_of(data), resource_id_of(data))


def _plain_entry(data: dict[str, Any], resource_type: str, resource_id: str) -> BundleEntry:
    full_url = full_url_for(resource_type, resource_id)
    if full_url is None:
        logger.debug("No fullUrl for %s without an id", resource_type)
        return {"resource": data}
    return {"fullUrl": full_url, "resource": data}
