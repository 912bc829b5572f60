"""desensitize CLI: inspect redaction registry configs."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from desensitize.config import load_registry_config
from desensitize.constants import EXIT_INVALID_CONFIG, EXIT_SUCCESS
from desensitize.errors import RegistryConfigError


def _version_callback(value: bool) -> None:
    if value:
        from desensitize import __version__

        typer.echo(f"desensitize {__version__}")
        raise typer.Exit()


app = typer.Typer(add_completion=False, help="Redacted copies of structured values")


@app.callback(invoke_without_command=True)
def _main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version and exit."
    ),
) -> None:
    pass


@app.command()
def check(
    config: Path = typer.Argument(..., help="Registry config file (YAML)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Validate a registry config and print its substitutes."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        registry = load_registry_config(config)
    except RegistryConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(EXIT_INVALID_CONFIG) from exc

    entries = registry.entries()
    typer.echo(json.dumps(entries, indent=2, sort_keys=True, default=repr))
    typer.echo(f"{len(entries)} type(s) registered from {config}")
    raise typer.Exit(EXIT_SUCCESS)


def main() -> None:
    app()


__all__ = ["app", "main"]
