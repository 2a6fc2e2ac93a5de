"""FHIR Bundle assembly and disassembly."""

from fhir_bundler.bundle.builder import (
    BundleBuilder,
    assemble_message_bundle,
    assemble_transaction_bundle,
    convert_searchset_to_message_bundle,
)
from fhir_bundler.bundle.entries import build_message_entry, build_transaction_entry
from fhir_bundler.bundle.header import build_message_header, build_message_header_entry
from fhir_bundler.bundle.models import Bundle, BundleEntry, as_model, ensure_bundle
from fhir_bundler.bundle.splitter import (
    ResourceFile,
    parse_bundle,
    split_bundle,
    write_resource_files,
)

__all__ = [
    "Bundle",
    "BundleBuilder",
    "BundleEntry",
    "ResourceFile",
    "as_model",
    "assemble_message_bundle",
    "assemble_transaction_bundle",
    "build_message_entry",
    "build_message_header",
    "build_message_header_entry",
    "build_transaction_entry",
    "convert_searchset_to_message_bundle",
    "ensure_bundle",
    "parse_bundle",
    "split_bundle",
    "write_resource_files",
]
