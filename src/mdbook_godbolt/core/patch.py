"""Splicing of replacement fragments into chapter content."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .blocks import CodeBlockSpan


@dataclass(frozen=True, slots=True)
class PatchEntry:
    """Replacement text for one span of the original content."""

    span: CodeBlockSpan
    replacement: str


def apply_patches(content: str, patches: Sequence[PatchEntry]) -> str:
    """Return ``content`` with every patch applied.

    Patches are applied from the highest ``span.start`` down, so every span
    still refers to original-content offsets when it is used. The scanner
    already produces them in ascending order; sorting keeps the result
    independent of the order they are handed over in.
    """
    for patch in sorted(patches, key=lambda entry: entry.span.start, reverse=True):
        span = patch.span
        content = content[: span.start] + patch.replacement + content[span.end :]
    return content


__all__ = ["PatchEntry", "apply_patches"]
