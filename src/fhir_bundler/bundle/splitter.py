"""Split a FHIR Bundle back into one document per resource."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from fhir_bundler.bundle.models import ensure_bundle
from fhir_bundler.errors import MissingIdentifierError, NotABundleError
from fhir_bundler.resources import parse_resource, serialize_resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceFile:
    """One resource split out of a bundle, keyed ``<resourceType>-<id>``."""

    key: str
    content: bytes

    @property
    def filename(self) -> str:
        return f"{self.key}.json"

    def __iter__(self) -> Iterator[Any]:
        # Unpacks as a (key, content) pair
        yield self.key
        yield self.content


def parse_bundle(content: bytes | str) -> dict[str, Any]:
    """Parse a bundle document.

    Raises:
        NotABundleError: If the document is not a Bundle.
    """
    return ensure_bundle(parse_resource(content))


def split_bundle(bundle: BaseModel | dict[str, Any]) -> list[ResourceFile]:
    """Split a bundle into one ``ResourceFile`` per entry, in entry order.

    Null entries are skipped. The whole bundle is split before anything is
    returned, so a missing id means no output at all.

    Raises:
        NotABundleError: If *bundle* is not a Bundle or an entry is malformed.
        MissingIdentifierError: If an entry's resource has no id.
    """
    data = ensure_bundle(bundle)
    files: list[ResourceFile] = []

    for index, entry in enumerate(data.get("entry") or []):
        # Null entries show up in some feeds; tolerated, not reported
        if entry is None:
            logger.debug("Skipping null entry %d", index)
            continue

        if not isinstance(entry, dict):
            raise NotABundleError(f"Bundle entry {index} is not an object")

        resource = entry.get("resource")
        if resource is not None and not isinstance(resource, dict):
            raise NotABundleError(f"Resource of bundle entry {index} is not an object")
        if not resource or not resource.get("id"):
            raise MissingIdentifierError(
                f"Can't convert to individual resource files: entry {index} missing an id"
            )
        resource_type = resource.get("resourceType")
        if not isinstance(resource_type, str) or not resource_type:
            raise NotABundleError(f"Resource of bundle entry {index} has no resourceType")

        files.append(
            ResourceFile(
                key=f"{resource_type}-{resource['id']}",
                content=serialize_resource(resource),
            )
        )

    return files


def write_resource_files(files: Iterable[ResourceFile], output_dir: Path) -> list[Path]:
    """Write each resource to ``<output_dir>/<key>.json``.

    Keys are not deduplicated: a later file with the same key overwrites an
    earlier one.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths: list[Path] = []
    for resource_file in files:
        path = output_dir / resource_file.filename
        path.write_bytes(resource_file.content)
        logger.info("wrote resource file: %s", path)
        paths.append(path)
    return paths
