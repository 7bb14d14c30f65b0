"""CLI command implementations exposed via `mdbook_godbolt.ui.cli`."""

from __future__ import annotations

from .install import install_command
from .preprocess import preprocess_book
from .supports import load_project_config, supports


__all__ = ["install_command", "load_project_config", "preprocess_book", "supports"]
