"""FHIR Bundler - Transaction and PDR message bundles from FHIR resource files, and back."""

from dotenv import load_dotenv

from fhir_bundler.bundle import (
    assemble_message_bundle,
    assemble_transaction_bundle,
    build_message_entry,
    build_message_header,
    build_transaction_entry,
    convert_searchset_to_message_bundle,
    split_bundle,
)
from fhir_bundler.errors import (
    BundlerError,
    ConverterError,
    InvalidResourceError,
    MissingIdentifierError,
    NotABundleError,
)
from fhir_bundler.references import full_url_for, is_self_reference_id

__version__ = "0.1.0"

# Load environment variables from .env file at package init
# so FHIR_BUNDLER_* settings are available when using as a library
load_dotenv()


__all__ = [
    "__version__",
    "BundlerError",
    "ConverterError",
    "InvalidResourceError",
    "MissingIdentifierError",
    "NotABundleError",
    "assemble_message_bundle",
    "assemble_transaction_bundle",
    "build_message_entry",
    "build_message_header",
    "build_transaction_entry",
    "convert_searchset_to_message_bundle",
    "full_url_for",
    "is_self_reference_id",
    "split_bundle",
]
