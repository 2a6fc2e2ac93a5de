"""FHIR Bundle assembly: transaction bundles and PDR message bundles."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from fhir_bundler.bundle.entries import build_message_entry, build_transaction_entry
from fhir_bundler.bundle.header import build_message_header_entry
from fhir_bundler.bundle.models import Bundle, BundleEntry, ensure_bundle


class BundleBuilder:
    """Collect entries in order and build a Bundle."""

    def __init__(self, bundle_type: str = "transaction") -> None:
        """Initialize bundle builder.

        Args:
            bundle_type: Type of bundle (transaction, message, searchset, etc.)
        """
        self.bundle_type = bundle_type
        self.entries: list[BundleEntry] = []

    def add_entry(self, entry: BundleEntry) -> None:
        """Append an entry; entries keep the order they are added in."""
        self.entries.append(entry)

    def add_transaction_resources(
        self,
        resources: Iterable[BaseModel | dict[str, Any]],
        use_stable_id: bool = False,
    ) -> None:
        """Add one transaction entry per resource.

        Args:
            resources: FHIR resources (Pydantic models or dicts)
            use_stable_id: PUT each resource at its id instead of POSTing it
        """
        for resource in resources:
            self.add_entry(build_transaction_entry(resource, use_stable_id))

    def add_message_resources(self, resources: Iterable[BaseModel | dict[str, Any]]) -> None:
        """Add one plain entry per resource."""
        for resource in resources:
            self.add_entry(build_message_entry(resource))

    def build(self) -> Bundle:
        """Build and return the bundle.

        Returns:
            Complete FHIR Bundle resource
        """
        return {
            "resourceType": "Bundle",
            "type": self.bundle_type,
            "entry": list(self.entries),
        }


def assemble_transaction_bundle(
    resources: Iterable[BaseModel | dict[str, Any]],
    use_stable_id: bool = False,
) -> Bundle:
    """Fold resources into a transaction bundle, preserving input order.

    Cross-references between entries rely on ``fullUrl`` rather than on entry
    order, so no dependency sort is done.

    Raises:
        InvalidResourceError: If *use_stable_id* is set and any resource has
            no id. Nothing is returned in that case.
    """
    builder = BundleBuilder(bundle_type="transaction")
    builder.add_transaction_resources(resources, use_stable_id)
    return builder.build()


def assemble_message_bundle(
    resources: Iterable[BaseModel | dict[str, Any]],
    username: str,
    source_url: str,
) -> Bundle:
    """Fold resources into a PDR message bundle headed by a MessageHeader."""
    builder = BundleBuilder(bundle_type="message")
    builder.add_entry(build_message_header_entry(username, source_url))
    builder.add_message_resources(resources)
    return builder.build()


def convert_searchset_to_message_bundle(
    searchset: BaseModel | dict[str, Any],
    username: str,
    source_url: str,
) -> Bundle:
    """Repackage the results of a search as a PDR message bundle.

    Search results are expected to be well formed: every entry must carry a
    resource.

    Raises:
        NotABundleError: If *searchset* is not a Bundle.
    """
    data = ensure_bundle(searchset)
    resources = [entry["resource"] for entry in data.get("entry") or []]
    return assemble_message_bundle(resources, username, source_url)
