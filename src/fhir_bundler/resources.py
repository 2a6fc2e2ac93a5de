"""Resource documents: parsing, serialization and field access.

Resources are handled in their JSON shape. fhir.resources models are accepted
wherever a resource is expected and converted on the way in.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from fhir_bundler.errors import InvalidResourceError


def resource_to_dict(resource: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Return the JSON shape of a resource (Pydantic model or dict).

    Dicts are returned as-is; models are dumped with ``resourceType`` first.
    """
    if isinstance(resource, BaseModel):
        data = resource.model_dump(mode="json", by_alias=True, exclude_none=True)
        resource_type = getattr(type(resource), "get_resource_type", None)
        if resource_type is not None:
            data = {"resourceType": resource_type(), **data}
        return data
    if isinstance(resource, dict):
        return resource
    raise InvalidResourceError(f"Not a FHIR resource: {type(resource).__name__}")


def resource_type_of(resource: dict[str, Any]) -> str:
    """The ``resourceType`` of a resource; raises if it is missing."""
    resource_type = resource.get("resourceType")
    if not isinstance(resource_type, str) or not resource_type:
        raise InvalidResourceError("Resource is missing a resourceType")
    return resource_type


def resource_id_of(resource: dict[str, Any]) -> str:
    """The resource ``id``, with a missing id reported as ``""``."""
    return resource.get("id") or ""


def parse_resource(content: bytes | str) -> dict[str, Any]:
    """Parse a JSON resource document.

    Raises:
        InvalidResourceError: If the content is not JSON or has no resourceType.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidResourceError(f"Resource document is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidResourceError("Resource document must be a JSON object")
    resource_type_of(data)
    return data


def serialize_resource(resource: BaseModel | dict[str, Any]) -> bytes:
    """Serialize a resource (or bundle) to indented UTF-8 JSON."""
    return json.dumps(resource_to_dict(resource), indent=2, ensure_ascii=False).encode("utf-8")
