"""Shapes of the Bundle envelopes produced by the bundler."""

from __future__ import annotations

from typing import Any, Literal, NotRequired, TypedDict

from pydantic import BaseModel

from fhir_bundler.errors import NotABundleError
from fhir_bundler.fhir_spec import get_resource_class
from fhir_bundler.resources import resource_to_dict


class EntryRequest(TypedDict):
    """HTTP semantics of a transaction entry."""

    method: Literal["POST", "PUT"]
    url: str


class BundleEntry(TypedDict):
    """One resource in a bundle, with its transaction request if any."""

    fullUrl: NotRequired[str]
    resource: dict[str, Any]
    request: NotRequired[EntryRequest]


class Bundle(TypedDict):
    """A Bundle resource in its JSON shape."""

    resourceType: Literal["Bundle"]
    type: str
    entry: list[BundleEntry]


def ensure_bundle(bundle: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Return the JSON shape of *bundle*, rejecting anything that is not a Bundle.

    Raises:
        NotABundleError: If the input is not a Bundle resource.
    """
    if not isinstance(bundle, (BaseModel, dict)):
        raise NotABundleError(f"Expected a Bundle, got {type(bundle).__name__}")
    data = resource_to_dict(bundle)
    if data.get("resourceType") != "Bundle":
        raise NotABundleError(
            f"Expected a Bundle, got resourceType={data.get('resourceType')!r}"
        )
    return data


def as_model(bundle: Bundle | dict[str, Any]) -> BaseModel:
    """Convert a bundle into the typed fhir.resources R4B ``Bundle`` model."""
    bundle_class = get_resource_class("Bundle")
    return bundle_class(**ensure_bundle(bundle))
