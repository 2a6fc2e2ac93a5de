"""Conversion of split resource directories to FSH with GoFSH.

The converter is an external executable. ``ConverterInvoker`` is the seam the
rest of the package talks to, so directory handling can be exercised without
GoFSH installed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fhir_bundler.errors import ConverterError

logger = logging.getLogger(__name__)

GOFSH_OUTPUT_DIR = "goFSH"
FSH_COLLECTION_DIR = "asFSH"
# Where GoFSH leaves its single-file output, relative to the converted directory
FSH_RESULT_PATH = Path(GOFSH_OUTPUT_DIR, "input", "fsh", "resources.fsh")


class ConverterInvoker(Protocol):
    """Converts one directory of resource files; returns True on success."""

    def convert(self, directory: Path) -> bool: ...


@dataclass
class GoFSHConverter:
    """Run ``gofsh`` in single-file mode, writing to ``<directory>/goFSH``."""

    command: str = "gofsh"
    timeout: float | None = None

    def build_command(self, directory: Path) -> list[str]:
        return [
            self.command,
            "-s",
            "single-file",
            "-o",
            str(directory / GOFSH_OUTPUT_DIR),
            str(directory),
        ]

    def convert(self, directory: Path) -> bool:
        """Convert *directory*.

        Raises:
            ConverterError: If the converter executable cannot be found.
        """
        try:
            result = subprocess.run(  # noqa: S603
                self.build_command(directory),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ConverterError(f"Converter executable not found: {self.command!r}") from None
        except subprocess.TimeoutExpired:
            logger.error("%s timed out after %ss on %s", self.command, self.timeout, directory)
            return False

        if result.returncode != 0:
            logger.debug("%s stderr: %s", self.command, result.stderr.strip())
        return result.returncode == 0


def _subdirectories(directory: Path) -> list[Path]:
    return sorted(
        path for path in directory.iterdir() if path.is_dir() and path.name != FSH_COLLECTION_DIR
    )


def convert_subdirectories(directory: Path, converter: ConverterInvoker) -> dict[str, bool]:
    """Run *converter* on every subdirectory of *directory*.

    Returns:
        Mapping of subdirectory name to whether its conversion succeeded
    """
    results: dict[str, bool] = {}
    for subdir in _subdirectories(directory):
        ok = converter.convert(subdir)
        logger.info(
            "processing directory: %s; result = %s", subdir, "success" if ok else "fail"
        )
        results[subdir.name] = ok
    return results


def collect_fsh_files(directory: Path) -> list[Path]:
    """Copy each subdirectory's GoFSH output into ``<directory>/asFSH``.

    Every copy is named after its subdirectory (``<name>.fsh``) since GoFSH
    always calls its output ``resources.fsh``. Subdirectories without output
    are skipped with a warning.
    """
    target_dir = directory / FSH_COLLECTION_DIR
    target_dir.mkdir(exist_ok=True)

    collected: list[Path] = []
    for subdir in _subdirectories(directory):
        source = subdir / FSH_RESULT_PATH
        if not source.is_file():
            logger.warning("No FSH output in %s", subdir)
            continue
        target = target_dir / f"{subdir.name}.fsh"
        shutil.copyfile(source, target)
        logger.info("copied %s -> %s", source, target)
        collected.append(target)
    return collected
