"""Book model exchanged with mdBook over stdin and stdout.

mdBook invokes a preprocessor with a JSON array ``[context, book]`` on stdin
and reads the processed book back from stdout. Only chapter contents are
ever changed here; every key this module does not know about is kept and
written back unchanged so newer mdBook releases round-trip cleanly.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import io
import json
from pathlib import Path
from typing import IO, Any

from .exceptions import DocumentIOFailure


__all__ = [
    "Book",
    "BookItem",
    "Chapter",
    "PartTitle",
    "PreprocessorContext",
    "Separator",
    "parse_input",
    "write_book",
]


_CHAPTER_KEYS = ("name", "content", "number", "sub_items", "path", "source_path", "parent_names")


@dataclass(slots=True)
class Chapter:
    """A chapter with its markdown content and nested sub-items."""

    name: str
    content: str = ""
    number: list[int] | None = None
    sub_items: list[BookItem] = field(default_factory=list)
    path: str | None = None
    source_path: str | None = None
    parent_names: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_draft(self) -> bool:
        """Draft chapters are listed in SUMMARY.md without a file."""
        return self.path is None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Chapter:
        if not isinstance(payload.get("name"), str):
            raise DocumentIOFailure("chapter is missing its 'name'")
        content = payload.get("content", "")
        if not isinstance(content, str):
            raise DocumentIOFailure(f"chapter '{payload['name']}' has non-text content")
        return cls(
            name=payload["name"],
            content=content,
            number=payload.get("number"),
            sub_items=[_item_from_json(item) for item in payload.get("sub_items") or []],
            path=payload.get("path"),
            source_path=payload.get("source_path"),
            parent_names=list(payload.get("parent_names") or []),
            extra={key: value for key, value in payload.items() if key not in _CHAPTER_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [_item_to_json(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": list(self.parent_names),
        }
        payload.update(self.extra)
        return payload


@dataclass(slots=True)
class Separator:
    """Horizontal separator between SUMMARY.md sections."""


@dataclass(slots=True)
class PartTitle:
    """Unnumbered part heading in the table of contents."""

    title: str


BookItem = Chapter | Separator | PartTitle


def _item_from_json(raw: Any) -> BookItem:
    if raw == "Separator":
        return Separator()
    if isinstance(raw, Mapping):
        if "Chapter" in raw:
            return Chapter.from_dict(raw["Chapter"])
        if "PartTitle" in raw:
            return PartTitle(str(raw["PartTitle"]))
    raise DocumentIOFailure(f"unrecognised book item: {raw!r}")


def _item_to_json(item: BookItem) -> Any:
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"


@dataclass(slots=True)
class Book:
    """Ordered book items, as handed over by mdBook."""

    items: list[BookItem] = field(default_factory=list)
    items_key: str = "sections"
    extra: dict[str, Any] = field(default_factory=lambda: {"__non_exhaustive": None})

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> Book:
        # mdBook 0.4 names the list "sections", 0.5 renamed it "items".
        items_key = "items" if "items" in payload and "sections" not in payload else "sections"
        raw_items = payload.get(items_key)
        if not isinstance(raw_items, list):
            raise DocumentIOFailure(f"book has no '{items_key}' list")
        return cls(
            items=[_item_from_json(item) for item in raw_items],
            items_key=items_key,
            extra={key: value for key, value in payload.items() if key != items_key},
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {self.items_key: [_item_to_json(item) for item in self.items]}
        payload.update(self.extra)
        return payload

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter depth-first, in table-of-contents order."""
        stack: list[Iterator[BookItem]] = [iter(self.items)]
        while stack:
            item = next(stack[-1], None)
            if item is None:
                stack.pop()
                continue
            if isinstance(item, Chapter):
                yield item
                stack.append(iter(item.sub_items))


@dataclass(slots=True)
class PreprocessorContext:
    """Build context mdBook passes alongside the book."""

    root: Path
    config: dict[str, Any]
    renderer: str
    mdbook_version: str
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> PreprocessorContext:
        try:
            root = payload["root"]
            config = payload["config"]
            renderer = payload["renderer"]
            version = payload["mdbook_version"]
        except KeyError as exc:
            raise DocumentIOFailure(f"preprocessor context is missing {exc}") from exc
        if not isinstance(config, Mapping):
            raise DocumentIOFailure("preprocessor context 'config' must be an object")
        known = {"root", "config", "renderer", "mdbook_version"}
        return cls(
            root=Path(root),
            config=dict(config),
            renderer=str(renderer),
            mdbook_version=str(version),
            extra={key: value for key, value in payload.items() if key not in known},
        )


def parse_input(stream: IO[bytes] | IO[str]) -> tuple[PreprocessorContext, Book]:
    """Read the ``[context, book]`` pair mdBook writes to a preprocessor.

    Binary streams are decoded as UTF-8, the encoding mdBook always uses,
    whatever the locale of the process.
    """
    try:
        raw = stream.read()
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        payload = json.loads(text)
    except UnicodeDecodeError as exc:
        raise DocumentIOFailure(f"book JSON on stdin is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise DocumentIOFailure(f"unable to read book JSON: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentIOFailure(f"unable to parse book JSON from stdin: {exc}") from exc

    if not isinstance(payload, list) or len(payload) != 2:
        raise DocumentIOFailure("expected a [context, book] JSON array on stdin")
    raw_context, raw_book = payload
    if not isinstance(raw_context, Mapping) or not isinstance(raw_book, Mapping):
        raise DocumentIOFailure("context and book must both be JSON objects")
    return PreprocessorContext.from_dict(raw_context), Book.from_dict(raw_book)


def write_book(book: Book, stream: IO[bytes] | IO[str]) -> None:
    """Serialise ``book`` for mdBook, as UTF-8 when ``stream`` is binary."""
    text = json.dumps(book.to_dict(), ensure_ascii=False)
    try:
        if isinstance(stream, io.TextIOBase):
            stream.write(text)
        else:
            stream.write(text.encode("utf-8"))
        stream.flush()
    except UnicodeEncodeError as exc:
        raise DocumentIOFailure(f"unable to encode book JSON for output: {exc}") from exc
    except OSError as exc:
        raise DocumentIOFailure(f"unable to write book JSON: {exc}") from exc
