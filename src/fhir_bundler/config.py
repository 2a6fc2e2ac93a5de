"""Settings for the bundler: YAML file, then environment, then CLI options."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "FHIR_BUNDLER_"


class BundlerConfig(BaseModel):
    """Defaults for bundle creation and FSH conversion."""

    username: str = Field(default="", description="Account name sent in the PDR MessageHeader")
    source_url: str = Field(default="", description="Source endpoint of the PDR MessageHeader")
    use_resource_id: bool = Field(
        default=False,
        description="PUT transaction entries at their resource id instead of POSTing them",
    )
    gofsh_command: str = Field(default="gofsh", description="GoFSH executable")
    gofsh_timeout: float | None = Field(
        default=None, gt=0, description="Seconds to wait for GoFSH per directory"
    )


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in BundlerConfig.model_fields:
        value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_config(path: Path | None = None) -> BundlerConfig:
    """Load settings from an optional YAML file and ``FHIR_BUNDLER_*`` variables.

    Environment variables win over the file. Values are validated by
    ``BundlerConfig``, so ``FHIR_BUNDLER_USE_RESOURCE_ID=true`` becomes a bool.

    Raises:
        ValueError: If the YAML file is invalid or does not contain a mapping.
    """
    data: dict[str, Any] = {}
    if path is not None:
        with open(path) as f:
            try:
                loaded = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid config file {path}: {exc}") from exc
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        data.update(loaded or {})

    data.update(_env_overrides())
    return BundlerConfig.model_validate(data)
