"""fhir-bundler CLI - Pack FHIR resource files into bundles and split them back out."""

import logging
import sys
from pathlib import Path

import typer

from fhir_bundler.config import BundlerConfig, load_config
from fhir_bundler.errors import BundlerError

app = typer.Typer(help="Build FHIR transaction / PDR message bundles and split bundles into files")

_config_option = typer.Option(
    None, "--config", "-c", help="YAML file with bundler settings", exists=True, dir_okay=False
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Build FHIR transaction / PDR message bundles and split bundles into files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


def _load(config: Path | None) -> BundlerConfig:
    try:
        return load_config(config)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command()
def transaction(
    directory: Path = typer.Argument(
        ..., help="Directory of FHIR resource JSON files", exists=True, file_okay=False
    ),
    use_resource_id: bool | None = typer.Option(
        None,
        "--use-resource-id/--no-use-resource-id",
        help="PUT each resource at its id instead of POSTing it",
    ),
    config: Path | None = _config_option,
) -> None:
    """Create <directory>_transactionBundle.json from a directory of resources.

    Examples:

      # Let the server assign ids
      fhir-bundler transaction patients/

      # Upsert resources at their own ids
      fhir-bundler transaction patients/ --use-resource-id
    """
    from fhir_bundler.packager import create_transaction_from_directory

    settings = _load(config)
    if use_resource_id is None:
        use_resource_id = settings.use_resource_id

    try:
        bundle_file = create_transaction_from_directory(directory, use_resource_id=use_resource_id)
        typer.echo(f"✓ Bundle written to: {bundle_file}")
    except (BundlerError, OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command()
def pdr(
    directory: Path = typer.Argument(
        ..., help="Directory of FHIR resource JSON files", exists=True, file_okay=False
    ),
    username: str | None = typer.Option(None, "--username", "-u", help="Account username"),
    source_url: str | None = typer.Option(None, "--source-url", "-s", help="Source endpoint URL"),
    config: Path | None = _config_option,
) -> None:
    """Create <directory>_PDRMessageBundle.json from a directory of resources."""
    from fhir_bundler.packager import create_pdr_from_directory

    settings = _load(config)
    try:
        bundle_file = create_pdr_from_directory(
            directory,
            username if username is not None else settings.username,
            source_url if source_url is not None else settings.source_url,
        )
        typer.echo(f"✓ Bundle written to: {bundle_file}")
    except (BundlerError, OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command("searchset-to-pdr")
def searchset_to_pdr(
    file: Path = typer.Argument(..., help="Searchset Bundle JSON file", exists=True, dir_okay=False),
    username: str | None = typer.Option(None, "--username", "-u", help="Account username"),
    source_url: str | None = typer.Option(None, "--source-url", "-s", help="Source endpoint URL"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output Bundle JSON file"),
    config: Path | None = _config_option,
) -> None:
    """Repackage a searchset bundle as a PDR message bundle."""
    from fhir_bundler.packager import searchset_file_to_pdr

    settings = _load(config)
    try:
        bundle_file = searchset_file_to_pdr(
            file,
            username if username is not None else settings.username,
            source_url if source_url is not None else settings.source_url,
            out=out,
        )
        typer.echo(f"✓ Bundle written to: {bundle_file}")
    except (BundlerError, OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command()
def split(
    path: Path = typer.Argument(
        ..., help="Bundle JSON file, or a directory of bundle files", exists=True
    ),
) -> None:
    """Write each bundle entry to <bundle-dir>/<bundle-name>/<type>-<id>.json."""
    from fhir_bundler.packager import (
        bundle_to_individual_resource_files,
        bundles_in_dir_to_individual_resource_files,
    )

    try:
        if path.is_dir():
            written = bundles_in_dir_to_individual_resource_files(path)
            count = sum(len(paths) for paths in written.values())
            typer.echo(f"✓ Split {len(written)} bundles into {count} resource files")
        else:
            paths = bundle_to_individual_resource_files(path)
            typer.echo(f"✓ Split {path.name} into {len(paths)} resource files")
    except (BundlerError, OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@app.command()
def gofsh(
    directory: Path = typer.Argument(
        ..., help="Directory whose subdirectories hold resource files", exists=True, file_okay=False
    ),
    command: str | None = typer.Option(None, "--command", help="GoFSH executable"),
    config: Path | None = _config_option,
) -> None:
    """Run GoFSH on every subdirectory (output goes to <subdir>/goFSH)."""
    from fhir_bundler.converter import GoFSHConverter, convert_subdirectories

    settings = _load(config)
    converter = GoFSHConverter(
        command=command or settings.gofsh_command,
        timeout=settings.gofsh_timeout,
    )
    try:
        results = convert_subdirectories(directory, converter)
    except (BundlerError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    failed = [name for name, ok in results.items() if not ok]
    typer.echo(f"✓ Converted {len(results) - len(failed)} of {len(results)} directories")
    if failed:
        typer.echo(f"❌ Failed: {', '.join(failed)}", err=True)
        sys.exit(1)


@app.command("collect-fsh")
def collect_fsh(
    directory: Path = typer.Argument(
        ..., help="Directory previously processed with `gofsh`", exists=True, file_okay=False
    ),
) -> None:
    """Copy every subdirectory's GoFSH output into <directory>/asFSH."""
    from fhir_bundler.converter import collect_fsh_files

    try:
        collected = collect_fsh_files(directory)
    except OSError as exc:
        typer.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    typer.echo(f"✓ Collected {len(collected)} FSH files → {directory / 'asFSH'}")


if __name__ == "__main__":
    app()
