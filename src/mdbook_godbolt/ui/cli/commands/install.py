"""Installation command wiring the preprocessor into an mdBook project."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from mdbook_godbolt.install import install


def install_command(
    project_dir: Annotated[
        Path,
        typer.Option(
            "--dir",
            "-d",
            help="Root of the mdBook project holding book.toml.",
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
) -> None:
    """Register the preprocessor in book.toml and copy book.js into theme/."""
    report = install(project_dir)
    if report.config_changed:
        typer.echo(f"Saved changed configuration to '{report.config_path}'")
    else:
        typer.echo(f"Configuration '{report.config_path}' already up to date")
    typer.echo(f"Copied book.js to '{report.asset_path}'")
    typer.echo("Installed mdbook-godbolt preprocessor")
