from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mdbook_godbolt.core.book import (
    Book,
    Chapter,
    PartTitle,
    Separator,
    parse_input,
    write_book,
)
from mdbook_godbolt.core.exceptions import DocumentIOFailure


def _chapter(name: str, path: str | None, sub_items: list[dict] | None = None) -> dict:
    return {
        "Chapter": {
            "name": name,
            "content": f"# {name}\n",
            "number": [1],
            "sub_items": sub_items or [],
            "path": path,
            "source_path": path,
            "parent_names": [],
        }
    }


CONTEXT = {
    "root": "/book",
    "config": {"book": {"title": "Demo"}, "preprocessor": {"godbolt": {}}},
    "renderer": "html",
    "mdbook_version": "0.4.40",
    "__non_exhaustive": None,
}


def test_parse_input_reads_context_and_book() -> None:
    raw_book = {
        "sections": [_chapter("Intro", "intro.md"), "Separator", {"PartTitle": "Part"}],
        "__non_exhaustive": None,
    }

    context, book = parse_input(io.StringIO(json.dumps([CONTEXT, raw_book])))

    assert context.root == Path("/book")
    assert context.renderer == "html"
    assert context.mdbook_version == "0.4.40"
    assert context.extra == {"__non_exhaustive": None}
    assert isinstance(book.items[0], Chapter)
    assert isinstance(book.items[1], Separator)
    assert book.items[2] == PartTitle("Part")


def test_book_round_trip_keeps_unknown_keys() -> None:
    chapter = _chapter("Intro", "intro.md")
    chapter["Chapter"]["future_field"] = {"x": 1}
    raw_book = {"sections": [chapter, "Separator"], "__non_exhaustive": None, "extra": True}

    assert Book.from_dict(raw_book).to_dict() == raw_book


def test_book_items_key_from_newer_mdbook() -> None:
    raw_book = {"items": [_chapter("Intro", "intro.md")]}

    book = Book.from_dict(raw_book)

    assert book.items_key == "items"
    assert book.to_dict() == raw_book


def test_iter_chapters_is_depth_first() -> None:
    raw_book = {
        "sections": [
            _chapter("A", "a.md", [_chapter("A.1", "a1.md", [_chapter("A.1.1", None)])]),
            {"PartTitle": "Part"},
            _chapter("B", "b.md"),
        ]
    }

    book = Book.from_dict(raw_book)

    assert [chapter.name for chapter in book.iter_chapters()] == ["A", "A.1", "A.1.1", "B"]


def test_draft_chapter_has_no_path() -> None:
    assert Chapter(name="Draft").is_draft
    assert not Chapter(name="Real", path="real.md").is_draft


def test_write_book_emits_json() -> None:
    book = Book(items=[Chapter(name="Ünïcode", content="ü", path="u.md")])
    stream = io.StringIO()

    write_book(book, stream)

    payload = json.loads(stream.getvalue())
    assert payload["sections"][0]["Chapter"]["content"] == "ü"
    assert payload["__non_exhaustive"] is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        json.dumps({"sections": []}),
        json.dumps([CONTEXT]),
        json.dumps([CONTEXT, {"no_sections": []}]),
        json.dumps([{"root": "/book"}, {"sections": []}]),
        json.dumps([CONTEXT, {"sections": [{"Unknown": {}}]}]),
        json.dumps([CONTEXT, {"sections": [{"Chapter": {"content": "x"}}]}]),
    ],
)
def test_parse_input_rejects_malformed_payloads(raw: str) -> None:
    with pytest.raises(DocumentIOFailure):
        parse_input(io.StringIO(raw))


def test_binary_streams_are_exchanged_as_utf8() -> None:
    raw_book = {"sections": [_chapter("Café 日本", "intro.md")], "__non_exhaustive": None}
    source = io.BytesIO(json.dumps([CONTEXT, raw_book], ensure_ascii=False).encode("utf-8"))

    _, book = parse_input(source)
    target = io.BytesIO()
    write_book(book, target)

    payload = json.loads(target.getvalue().decode("utf-8"))
    assert payload["sections"][0]["Chapter"]["name"] == "Café 日本"
    assert "日本".encode("utf-8") in target.getvalue()


def test_parse_input_rejects_invalid_utf8() -> None:
    with pytest.raises(DocumentIOFailure, match="UTF-8"):
        parse_input(io.BytesIO(b"[\xff]"))


def test_write_book_reports_unencodable_text_stream() -> None:
    book = Book(items=[Chapter(name="Intro", content="日本", path="intro.md")])
    stream = io.TextIOWrapper(io.BytesIO(), encoding="cp1252")

    with pytest.raises(DocumentIOFailure):
        write_book(book, stream)
