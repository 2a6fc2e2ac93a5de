"""MessageHeader for Patient Data Receipt (PDR) message bundles."""

from typing import Any

from fhir_bundler.bundle.models import BundleEntry

PDR_EVENT_URI = "urn:mitre:healthmanager:pdr"

ACCOUNT_EXTENSION_URL = (
    "https://github.com/Open-Health-Manager/patient-data-receipt-ig"
    "/StructureDefinition/AccountExtension"
)


def build_message_header(username: str, source_url: str) -> dict[str, Any]:
    """Build the PDR ``MessageHeader`` resource.

    *username* and *source_url* are copied verbatim, empty values included;
    checking them is left to the receiving server.
    """
    return {
        "resourceType": "MessageHeader",
        "extension": [
            {
                "url": ACCOUNT_EXTENSION_URL,
                "valueString": username,
            }
        ],
        "eventUri": PDR_EVENT_URI,
        "source": {"endpoint": source_url},
    }


def build_message_header_entry(username: str, source_url: str) -> BundleEntry:
    """Wrap the PDR ``MessageHeader`` in a plain bundle entry."""
    return {"resource": build_message_header(username, source_url)}
