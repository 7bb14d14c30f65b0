"""Rewriting of godbolt-annotated code blocks across a book.

Architecture
: `preprocess_chapter` is the whole per-chapter transformation: locate fenced
  blocks, keep the annotated ones, render and wrap them, then splice the
  fragments back in one patch pass.
: `GodboltPreprocessor.run` walks every non-draft chapter. New contents are
  staged and only committed once every chapter succeeded, so a failure
  leaves the book exactly as mdBook handed it over.

Usage Example
:
    >>> from mdbook_godbolt.core.preprocessor import preprocess_chapter
    >>> content, count = preprocess_chapter("```rust,godbolt\\nfn main() {}\\n```\\n")
    >>> count
    1
    >>> content.startswith('<pre><pre class="godbolt"><code')
    True
"""

from __future__ import annotations

import logging

from .annotate import IdAllocator, wrap_code_element
from .blocks import CodeBlock, extract_body, locate_code_blocks
from .book import Book, Chapter, PreprocessorContext
from .config import GodboltConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import ChapterProcessingError, RenderFailure
from .info_string import parse_info_string
from .patch import PatchEntry, apply_patches
from .render import MarkdownRenderer, Renderer, extract_code_element


logger = logging.getLogger(__name__)

__all__ = ["GodboltPreprocessor", "preprocess_chapter"]


def preprocess_chapter(
    content: str,
    *,
    config: GodboltConfig | None = None,
    renderer: Renderer | None = None,
    ids: IdAllocator | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> tuple[str, int]:
    """Rewrite the annotated blocks of one chapter.

    Returns the new content and the number of rewritten blocks. Raises
    `RenderFailure` when a block cannot be rendered.
    """
    config = config or GodboltConfig()
    renderer = renderer or MarkdownRenderer(config.markdown_extensions)
    if config.element_ids and ids is None:
        ids = IdAllocator(prefix=config.marker)

    patches: list[PatchEntry] = []
    for located in locate_code_blocks(content):
        meta = parse_info_string(located.info_string, config.marker)
        if meta is None:
            if emitter is not None:
                emitter.event("block_skipped", {"info": located.info_string})
            continue

        block = CodeBlock(meta=meta, body=extract_body(located.span.slice(content)))
        html = renderer.render(block.body, block.meta.language)
        code_element = extract_code_element(html)
        element_id = ids.next_id() if config.element_ids and ids is not None else None
        replacement = wrap_code_element(
            block.meta, code_element, marker=config.marker, element_id=element_id
        )
        patches.append(PatchEntry(located.span, replacement))

    if not patches:
        return content, 0
    return apply_patches(content, patches), len(patches)


class GodboltPreprocessor:
    """mdBook preprocessor turning annotated code blocks into godbolt snippets."""

    name = "mdbook-godbolt"

    def __init__(
        self,
        config: GodboltConfig | None = None,
        *,
        renderer: Renderer | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or GodboltConfig()
        self.renderer = renderer or MarkdownRenderer(self.config.markdown_extensions)
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

    @classmethod
    def from_context(
        cls,
        context: PreprocessorContext,
        *,
        renderer: Renderer | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> GodboltPreprocessor:
        config = GodboltConfig.from_book_config(context.config)
        return cls(config, renderer=renderer, emitter=emitter)

    def supports_renderer(self, renderer: str) -> bool:
        return self.config.supports_renderer(renderer)

    def run(self, book: Book) -> Book:
        """Rewrite every non-draft chapter of ``book`` in place.

        The first chapter that fails aborts the run with
        `ChapterProcessingError`; no chapter is modified in that case.
        """
        ids = IdAllocator(prefix=self.config.marker)
        staged: list[tuple[Chapter, str]] = []

        for chapter in book.iter_chapters():
            if chapter.is_draft:
                self.emitter.event("draft_skipped", {"chapter": chapter.name})
                continue
            try:
                content, count = preprocess_chapter(
                    chapter.content,
                    config=self.config,
                    renderer=self.renderer,
                    ids=ids,
                    emitter=self.emitter,
                )
            except RenderFailure as exc:
                raise ChapterProcessingError(chapter.name, str(exc)) from exc
            if count:
                staged.append((chapter, content))
                self.emitter.event("chapter_rendered", {"chapter": chapter.name, "blocks": count})

        for chapter, content in staged:
            chapter.content = content
        return book
