"""Location of fenced code blocks and extraction of their bodies.

Architecture
: `locate_code_blocks` runs markdown-it-py over a chapter and converts the
  line maps of top-level `fence` tokens into character spans of the original
  content. Spans run from the opening fence marker to the last
  non-whitespace character of the closing fence line.
: `extract_body` works on the text of one span only and never consults the
  scanner again, so it can be exercised on hand-written snippets.

Fences nested in block quotes or list items are not reported: their source
lines carry container prefixes that cannot be told apart from code. Fences
the scanner closes implicitly (no closing delimiter) are not reported either.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache
import logging
import re

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .info_string import GodboltMeta


logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n?|\n")


@dataclass(frozen=True, slots=True)
class CodeBlockSpan:
    """Half-open ``[start, end)`` range of a fenced block in chapter content."""

    start: int
    end: int

    def slice(self, content: str) -> str:
        return content[self.start : self.end]


@dataclass(frozen=True, slots=True)
class LocatedBlock:
    """A fenced block found by the scanner, before its info string is parsed."""

    span: CodeBlockSpan
    info_string: str


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """An annotated block ready to be rendered."""

    meta: GodboltMeta
    body: str


@lru_cache(maxsize=1)
def _scanner() -> MarkdownIt:
    return MarkdownIt("commonmark")


def _line_starts(content: str) -> list[int]:
    starts = [0]
    starts.extend(match.end() for match in _LINE_BREAK.finditer(content))
    return starts


def _line_text(content: str, starts: list[int], index: int) -> str:
    begin = starts[index]
    end = starts[index + 1] if index + 1 < len(starts) else len(content)
    return _LINE_BREAK.sub("", content[begin:end])


def _is_terminated(token: Token, line_map: list[int]) -> bool:
    # A closed fence maps its opening line, every content line and the
    # closing line; an unclosed one stops after the last content line.
    mapped = line_map[1] - line_map[0]
    content = token.content
    lines = content.count("\n")
    if content and not content.endswith("\n"):
        lines += 1
    return lines == mapped - 2


def locate_code_blocks(content: str) -> Iterator[LocatedBlock]:
    """Yield every terminated top-level fenced block in source order."""
    tokens = _scanner().parse(content)
    starts: list[int] | None = None

    for token in tokens:
        if token.type != "fence" or token.map is None:
            continue
        if token.level != 0:
            logger.debug("skipping fence nested in a container at line %d", token.map[0] + 1)
            continue
        if not _is_terminated(token, token.map):
            logger.debug("skipping unterminated fence at line %d", token.map[0] + 1)
            continue

        if starts is None:
            starts = _line_starts(content)
        first, last = token.map[0], token.map[1] - 1
        opening = _line_text(content, starts, first)
        closing = _line_text(content, starts, last)

        start = starts[first] + opening.find(token.markup)
        end = starts[last] + len(closing.rstrip())
        yield LocatedBlock(CodeBlockSpan(start, end), token.info)


def body_start_index(block_text: str) -> int:
    """Return the index right after the first line break, or ``0``."""
    match = _LINE_BREAK.search(block_text)
    if match is None:
        return 0
    index = match.end()
    if index > len(block_text) - 1:
        return 0
    return index


def body_end_index(block_text: str) -> int:
    """Return the index where the body ends once the closing fence is dropped."""
    if not block_text:
        return 0
    fence_char = block_text[0]
    end = len(block_text)
    while end > 0 and block_text[end - 1] == fence_char:
        end -= 1
    return len(block_text[:end].rstrip())


def extract_body(block_text: str) -> str:
    """Return the code body of a fenced block, fence lines excluded.

    A block without any line break (or with nothing after it) has no body
    region; an empty string is returned for it.
    """
    start = body_start_index(block_text)
    if start == 0:
        return ""
    end = body_end_index(block_text)
    if end <= start:
        return ""
    return block_text[start:end]


__all__ = [
    "CodeBlock",
    "CodeBlockSpan",
    "LocatedBlock",
    "body_end_index",
    "body_start_index",
    "extract_body",
    "locate_code_blocks",
]
