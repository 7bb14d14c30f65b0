"""Renderer support query issued by mdBook before running the preprocessor."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import tomlkit
from tomlkit.exceptions import TOMLKitError
import typer

from mdbook_godbolt.core.config import GodboltConfig
from mdbook_godbolt.core.exceptions import ConfigFailure


def load_project_config(project_dir: Path) -> GodboltConfig:
    """Read ``[preprocessor.godbolt]`` from ``book.toml`` when one is present."""
    config_path = project_dir / "book.toml"
    if not config_path.is_file():
        return GodboltConfig()
    try:
        document = tomlkit.parse(config_path.read_text(encoding="utf-8"))
    except (OSError, TOMLKitError) as exc:
        raise ConfigFailure(f"can't read configuration file '{config_path}': {exc}") from exc
    return GodboltConfig.from_book_config(document.unwrap())


def supports(
    renderer: Annotated[
        str,
        typer.Argument(help="Name of the mdBook renderer, e.g. 'html'."),
    ],
) -> None:
    """Exit with status 0 when RENDERER is supported, 1 otherwise."""
    config = load_project_config(Path.cwd())
    raise typer.Exit(code=0 if config.supports_renderer(renderer) else 1)
