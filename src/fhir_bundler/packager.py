"""Directory and file level workflows around the bundle core.

Bundles built from a directory are written next to it, named after it:
``<dir>_transactionBundle.json`` or ``<dir>_PDRMessageBundle.json``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fhir_bundler.bundle import (
    assemble_message_bundle,
    assemble_transaction_bundle,
    convert_searchset_to_message_bundle,
    parse_bundle,
    split_bundle,
    write_resource_files,
)
from fhir_bundler.sources import DirectorySource, ResourceSource, load_resources

logger = logging.getLogger(__name__)

TRANSACTION_BUNDLE_SUFFIX = "_transactionBundle.json"
PDR_BUNDLE_SUFFIX = "_PDRMessageBundle.json"


def bundle_output_path(directory: Path, suffix: str) -> Path:
    """Path of the bundle file for *directory*, placed in its parent."""
    directory = Path(directory).resolve()
    return directory.parent / f"{directory.name}{suffix}"


def write_bundle(bundle: Mapping[str, Any], path: Path) -> Path:
    """Write a bundle as indented JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(bundle, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Bundle written to: %s", path)
    return path


def create_transaction_from_directory(
    directory: Path,
    use_resource_id: bool = False,
    source: ResourceSource | None = None,
) -> Path:
    """Bundle every JSON resource file in *directory* into a transaction bundle.

    Args:
        directory: Directory of resource files; also names the output
        use_resource_id: PUT resources at their ids instead of POSTing them
        source: Alternative document source (defaults to the directory)

    Returns:
        Path of the written bundle
    """
    resources = load_resources(source or DirectorySource(directory))
    bundle = assemble_transaction_bundle(resources, use_stable_id=use_resource_id)
    return write_bundle(bundle, bundle_output_path(directory, TRANSACTION_BUNDLE_SUFFIX))


def create_pdr_from_directory(
    directory: Path,
    username: str,
    source_url: str,
    source: ResourceSource | None = None,
) -> Path:
    """Bundle every JSON resource file in *directory* into a PDR message bundle."""
    resources = load_resources(source or DirectorySource(directory))
    bundle = assemble_message_bundle(resources, username, source_url)
    return write_bundle(bundle, bundle_output_path(directory, PDR_BUNDLE_SUFFIX))


def searchset_file_to_pdr(
    filepath: Path,
    username: str,
    source_url: str,
    out: Path | None = None,
) -> Path:
    """Convert a searchset bundle file into a PDR message bundle file.

    The output defaults to ``<stem>_PDRMessageBundle.json`` beside the input.
    """
    searchset = parse_bundle(filepath.read_bytes())
    bundle = convert_searchset_to_message_bundle(searchset, username, source_url)
    out = out or filepath.with_name(f"{filepath.stem}{PDR_BUNDLE_SUFFIX}")
    return write_bundle(bundle, out)


def bundle_to_individual_resource_files(filepath: Path) -> list[Path]:
    """Split a bundle file into ``<dir>/<stem>/<resourceType>-<id>.json`` files.

    The output directory is only created once the whole bundle has been split,
    so a bundle with a missing id leaves nothing behind.
    """
    bundle = parse_bundle(filepath.read_bytes())
    files = split_bundle(bundle)
    return write_resource_files(files, filepath.parent / filepath.stem)


def bundles_in_dir_to_individual_resource_files(directory: Path) -> dict[Path, list[Path]]:
    """Split every JSON bundle file in *directory*.

    Returns:
        Mapping of bundle file to the resource files written for it
    """
    written: dict[Path, list[Path]] = {}
    for path in sorted(Path(directory).iterdir()):
        if not path.name.endswith(".json") or path.is_dir():
            continue
        logger.info("processing file: %s", path.name)
        written[path] = bundle_to_individual_resource_files(path)
    return written
