"""Core engine rewriting godbolt-annotated code blocks."""

from __future__ import annotations

from .annotate import IdAllocator, wrap_code_element
from .blocks import CodeBlock, CodeBlockSpan, LocatedBlock, extract_body, locate_code_blocks
from .book import Book, Chapter, PartTitle, PreprocessorContext, Separator
from .config import GodboltConfig
from .exceptions import (
    ChapterProcessingError,
    ConfigFailure,
    DocumentIOFailure,
    GodboltError,
    InstallError,
    RenderFailure,
)
from .info_string import GodboltMeta, parse_info_string
from .patch import PatchEntry, apply_patches
from .preprocessor import GodboltPreprocessor, preprocess_chapter
from .render import MarkdownRenderer, Renderer, extract_code_element


__all__ = [
    "Book",
    "Chapter",
    "ChapterProcessingError",
    "CodeBlock",
    "CodeBlockSpan",
    "ConfigFailure",
    "DocumentIOFailure",
    "GodboltConfig",
    "GodboltError",
    "GodboltMeta",
    "GodboltPreprocessor",
    "IdAllocator",
    "InstallError",
    "LocatedBlock",
    "MarkdownRenderer",
    "PartTitle",
    "PatchEntry",
    "PreprocessorContext",
    "RenderFailure",
    "Renderer",
    "Separator",
    "apply_patches",
    "extract_body",
    "extract_code_element",
    "locate_code_blocks",
    "parse_info_string",
    "preprocess_chapter",
    "wrap_code_element",
]
