"""Rendering of code bodies through Python-Markdown."""

from __future__ import annotations

from collections.abc import Sequence
from html import escape
import re
from typing import Any, Protocol, runtime_checkable

import markdown

from .exceptions import ConfigFailure, RenderFailure


__all__ = [
    "CODE_CLOSE_TAG",
    "CODE_OPEN_TAG",
    "MarkdownRenderer",
    "Renderer",
    "extract_code_element",
    "fence_for",
]


CODE_OPEN_TAG = "<code"
CODE_CLOSE_TAG = "</code>"

_BACKTICK_RUN = re.compile(r"`+")
# Language tags fenced_code accepts after the opening fence.
_FENCE_LANGUAGE = re.compile(r"[\w#+-][\w#.+-]*")
_PRIVATE_USE = range(0xE000, 0xF900)


@runtime_checkable
class Renderer(Protocol):
    """Anything able to turn a code body into HTML holding one ``<code>`` element."""

    def render(self, body: str, language: str) -> str: ...


def fence_for(body: str) -> str:
    """Return a backtick fence longer than any backtick run inside ``body``."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(body)), default=0)
    return "`" * max(3, longest + 1)


class MarkdownRenderer:
    """Render code bodies as fenced blocks with a reusable Markdown processor."""

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        self.extensions = list(extensions if extensions is not None else ["fenced_code"])
        self._processor: Any = None

    @property
    def processor(self) -> markdown.Markdown:
        if self._processor is None:
            try:
                self._processor = markdown.Markdown(extensions=self.extensions)
            except Exception as exc:  # pragma: no cover - library-controlled
                raise ConfigFailure(
                    f"Failed to initialize Markdown processor with {self.extensions}: {exc}"
                ) from exc
        return self._processor

    def render(self, body: str, language: str) -> str:
        # Python-Markdown expands tabs before fenced_code runs, so they travel
        # through conversion as a character the body does not use.
        tab = _unused_character(body) if "\t" in body else None
        if tab is not None:
            body = body.replace("\t", tab)

        tagged = _FENCE_LANGUAGE.fullmatch(language) is not None
        fence = fence_for(body)
        source = f"{fence}{language if tagged else ''}\n{body}\n{fence}"
        processor = self.processor
        processor.reset()
        try:
            output = processor.convert(source)
        except Exception as exc:  # pragma: no cover - library-controlled
            raise RenderFailure(f"Failed to render {language} code block: {exc}") from exc

        if not tagged:
            css_class = escape(f"language-{language}", quote=True)
            output = output.replace("<code>", f'<code class="{css_class}">', 1)
        if tab is not None:
            output = output.replace(tab, "\t")
        return output


def _unused_character(text: str) -> str:
    for code in _PRIVATE_USE:
        candidate = chr(code)
        if candidate not in text:
            return candidate
    raise RenderFailure("code body uses every private-use character")


def extract_code_element(html: str) -> str:
    """Return the first ``<code ...>...</code>`` element found in ``html``."""
    start = html.find(CODE_OPEN_TAG)
    if start < 0:
        raise RenderFailure("renderer output contains no <code> element")
    end = html.find(CODE_CLOSE_TAG, start)
    if end < 0:
        raise RenderFailure("renderer output contains no </code> closing tag")
    return html[start : end + len(CODE_CLOSE_TAG)]
