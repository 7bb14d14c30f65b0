"""Installation of the preprocessor into an mdBook project.

`install` registers ``[preprocessor.godbolt]`` in ``book.toml`` and copies the
``book.js`` theme script. The configuration change is computed by the pure
`inject_preprocessor` and written only when the text actually changed, so
running the command twice leaves the project untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import shutil

import tomlkit
from tomlkit.container import OutOfOrderTableProxy
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import Table

from .core.config import PREPROCESSOR_NAME
from .core.exceptions import ConfigFailure, InstallError


logger = logging.getLogger(__name__)

__all__ = [
    "ASSETS_DIR",
    "BOOK_JS",
    "InstallReport",
    "assets_version",
    "inject_preprocessor",
    "install",
]


ASSETS_DIR = Path(__file__).resolve().parent / "assets"
BOOK_JS = "book.js"
COMMAND = "mdbook-godbolt"
MANAGED_COMMENT = "do not edit: managed by `mdbook-godbolt install`"


@dataclass(slots=True)
class InstallReport:
    """Outcome of an installation run."""

    config_path: Path
    asset_path: Path
    config_changed: bool


def assets_version() -> str:
    """Return the version stamp of the bundled theme assets."""
    return (ASSETS_DIR / "VERSION").read_text(encoding="utf-8").strip()


def inject_preprocessor(config_text: str, *, version: str) -> str:
    """Return ``config_text`` with the godbolt preprocessor registered.

    Formatting and comments of the original document are preserved and
    nothing is rewritten when the entries already hold the expected values.
    """
    try:
        document = tomlkit.parse(config_text)
    except TOMLKitError as exc:
        raise ConfigFailure(f"configuration is not valid TOML: {exc}") from exc

    preprocessors = document.get("preprocessor")
    if preprocessors is None:
        preprocessors = tomlkit.table(is_super_table=True)
        document["preprocessor"] = preprocessors
    elif not isinstance(preprocessors, (Table, OutOfOrderTableProxy)):
        raise ConfigFailure("'preprocessor' in book.toml must be a table")

    entry = preprocessors.get(PREPROCESSOR_NAME)
    if entry is None:
        entry = tomlkit.table()
        preprocessors[PREPROCESSOR_NAME] = entry
    elif not isinstance(entry, Table):
        raise ConfigFailure(f"'preprocessor.{PREPROCESSOR_NAME}' in book.toml must be a table")

    if entry.get("command") != COMMAND:
        entry["command"] = COMMAND
    if entry.get("assets_version") != version:
        entry["assets_version"] = tomlkit.item(version).comment(MANAGED_COMMENT)

    return tomlkit.dumps(document)


def _copy_asset(theme_dir: Path) -> Path:
    try:
        theme_dir.mkdir(parents=True, exist_ok=True)
        target = theme_dir / BOOK_JS
        logger.info("Copying '%s' to '%s'", BOOK_JS, target)
        shutil.copyfile(ASSETS_DIR / BOOK_JS, target)
    except OSError as exc:
        raise InstallError(f"can't install '{BOOK_JS}' into '{theme_dir}': {exc}") from exc
    return target


def install(project_dir: Path | str = ".") -> InstallReport:
    """Register the preprocessor and copy the theme asset into ``project_dir``."""
    root = Path(project_dir)
    config_path = root / "book.toml"

    try:
        original = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFailure(f"can't read configuration file '{config_path}': {exc}") from exc

    updated = inject_preprocessor(original, version=assets_version())
    asset_path = _copy_asset(root / "theme")

    changed = updated != original
    if changed:
        logger.info("Saving changed configuration to '%s'", config_path)
        try:
            config_path.write_text(updated, encoding="utf-8")
        except OSError as exc:
            raise InstallError(f"can't write configuration '{config_path}': {exc}") from exc
    else:
        logger.info("Configuration '%s' already up to date", config_path)

    return InstallReport(config_path=config_path, asset_path=asset_path, config_changed=changed)
