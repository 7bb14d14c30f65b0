"""mdBook preprocessor embedding Compiler Explorer snippets in books.

Fenced code blocks whose info string carries the ``godbolt`` marker are
replaced by nested ``<pre>`` elements that the bundled ``book.js`` theme
script turns into runnable snippets.
"""

from __future__ import annotations

from .core import (
    Book,
    Chapter,
    GodboltConfig,
    GodboltError,
    GodboltMeta,
    GodboltPreprocessor,
    parse_info_string,
    preprocess_chapter,
)
from .version import get_version


__version__ = get_version()

__all__ = [
    "Book",
    "Chapter",
    "GodboltConfig",
    "GodboltError",
    "GodboltMeta",
    "GodboltPreprocessor",
    "__version__",
    "parse_info_string",
    "preprocess_chapter",
]
