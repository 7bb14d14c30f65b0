"""Parsing of the godbolt micro-format carried by fenced code info strings.

The info string of an annotated block looks like::

    cpp,godbolt-compiler:g122,godbolt-flags:-O2

Tokens are separated by commas. The first token is the language, and at
least one later token must be the marker itself or start with it. Qualifier
values run verbatim to the next comma.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_MARKER


QUALIFIER_KEYS = ("compiler", "flags")


@dataclass(frozen=True, slots=True)
class GodboltMeta:
    """Metadata extracted from an annotated info string."""

    language: str
    compiler: str | None = None
    flags: str | None = None

    def qualifiers(self) -> list[tuple[str, str]]:
        """Return present qualifiers in their stable output order."""
        pairs: list[tuple[str, str]] = []
        for key in QUALIFIER_KEYS:
            value = getattr(self, key)
            if value is not None:
                pairs.append((key, value))
        return pairs


def parse_info_string(info_string: str, marker: str = DEFAULT_MARKER) -> GodboltMeta | None:
    """Return the metadata of an annotated info string, or ``None``.

    ``None`` covers both a missing marker and an empty language token; the
    caller leaves such blocks exactly as written.
    """
    tokens = info_string.strip().split(",")
    language, rest = tokens[0], tokens[1:]
    if not any(token.startswith(marker) for token in rest):
        return None
    if not language:
        return None

    values: dict[str, str] = {}
    for token in rest:
        for key in QUALIFIER_KEYS:
            prefix = f"{marker}-{key}:"
            if token.startswith(prefix):
                values.setdefault(key, token[len(prefix) :])
                break

    return GodboltMeta(language=language, **values)


__all__ = ["GodboltMeta", "QUALIFIER_KEYS", "parse_info_string"]
