"""Sources of resource documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol

from fhir_bundler.resources import parse_resource

logger = logging.getLogger(__name__)


class ResourceSource(Protocol):
    """Supplies ``(identifier, content)`` pairs of resource documents."""

    def documents(self) -> Iterator[tuple[str, bytes]]: ...


class DirectorySource:
    """Resource documents stored as files directly inside one directory.

    Subdirectories are not descended into. Files are read in name order so
    bundles come out the same on every run.
    """

    def __init__(self, directory: Path, suffix: str = ".json") -> None:
        self.directory = Path(directory)
        self.suffix = suffix

    def documents(self) -> Iterator[tuple[str, bytes]]:
        for path in sorted(self.directory.iterdir()):
            if not path.name.endswith(self.suffix) or path.is_dir():
                continue
            logger.info("processing file: %s", path.name)
            yield path.name, path.read_bytes()


def load_resources(source: ResourceSource) -> list[dict[str, Any]]:
    """Parse every document a source supplies, in order."""
    return [parse_resource(content) for _, content in source.documents()]
