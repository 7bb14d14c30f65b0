"""Composition of the HTML fragment replacing an annotated block."""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_MARKER
from .info_string import GodboltMeta


@dataclass(slots=True)
class IdAllocator:
    """Run-wide counter handing out unique element ids.

    One allocator is created per run and passed explicitly to every chapter,
    so ids stay unique across the whole book.
    """

    prefix: str = DEFAULT_MARKER
    issued: int = 0

    def next_id(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued}"


def wrap_code_element(
    meta: GodboltMeta,
    code_element: str,
    *,
    marker: str = DEFAULT_MARKER,
    element_id: str | None = None,
) -> str:
    """Wrap a rendered ``<code>`` element in the nested godbolt ``<pre>`` tags.

    Attribute values are embedded as given, without escaping.
    """
    attributes = [' class="godbolt"']
    if element_id is not None:
        attributes.append(f' id="{element_id}"')
    for key, value in meta.qualifiers():
        attributes.append(f' data-{marker}-{key}="{value}"')
    return f"<pre><pre{''.join(attributes)}>{code_element}</pre></pre>"


__all__ = ["IdAllocator", "wrap_code_element"]
