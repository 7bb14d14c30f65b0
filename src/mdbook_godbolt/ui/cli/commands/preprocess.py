"""Preprocessing of the book mdBook streams through stdin and stdout."""

from __future__ import annotations

import logging
from typing import IO

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from mdbook_godbolt.core.book import parse_input, write_book
from mdbook_godbolt.core.preprocessor import GodboltPreprocessor

from ..state import emit_warning


logger = logging.getLogger(__name__)

SUPPORTED_MDBOOK = SpecifierSet(">=0.4.0,<0.5.0")


def check_mdbook_version(mdbook_version: str) -> bool:
    """Warn when the calling mdBook lies outside the supported release range."""
    try:
        supported = Version(mdbook_version) in SUPPORTED_MDBOOK
    except InvalidVersion:
        supported = False
    if not supported:
        emit_warning(
            f"mdbook-godbolt supports mdbook {SUPPORTED_MDBOOK}, "
            f"but is being called from mdbook version {mdbook_version}"
        )
    return supported


def preprocess_book(stdin: IO[bytes] | IO[str], stdout: IO[bytes] | IO[str]) -> None:
    """Read ``[context, book]`` from ``stdin`` and write the processed book."""
    context, book = parse_input(stdin)
    check_mdbook_version(context.mdbook_version)
    logger.debug("preprocessing book at %s for renderer %s", context.root, context.renderer)

    preprocessor = GodboltPreprocessor.from_context(context)
    write_book(preprocessor.run(book), stdout)
