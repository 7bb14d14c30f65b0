from __future__ import annotations

import pytest

from mdbook_godbolt.core.exceptions import RenderFailure
from mdbook_godbolt.core.render import (
    MarkdownRenderer,
    Renderer,
    extract_code_element,
    fence_for,
)


def test_markdown_renderer_produces_language_code_element() -> None:
    html = MarkdownRenderer().render("fn main() {}", "rust")

    element = extract_code_element(html)

    assert element.startswith("<code")
    assert 'class="language-rust"' in element
    assert "fn main() {}" in element
    assert element.endswith("</code>")


def test_markdown_renderer_escapes_html() -> None:
    element = extract_code_element(MarkdownRenderer().render("if (a < b && c) {}", "cpp"))

    assert "a &lt; b &amp;&amp; c" in element


def test_markdown_renderer_survives_backtick_fences_in_body() -> None:
    body = "let s = r#\"\n```\n\"#;"

    element = extract_code_element(MarkdownRenderer().render(body, "rust"))

    assert "```" in element
    assert "let s" in element


def test_markdown_renderer_is_reusable() -> None:
    renderer = MarkdownRenderer()

    first = renderer.render("int a;", "c")
    second = renderer.render("int a;", "c")

    assert first == second


def test_markdown_renderer_satisfies_protocol() -> None:
    assert isinstance(MarkdownRenderer(), Renderer)


def test_fence_for_outgrows_backtick_runs() -> None:
    assert fence_for("plain") == "```"
    assert fence_for("a ```` b") == "`````"


def test_extract_code_element_takes_first_element() -> None:
    html = '<div><pre><code class="x">a</code></pre><code>b</code></div>'

    assert extract_code_element(html) == '<code class="x">a</code>'


@pytest.mark.parametrize("html", ["<p>nothing here</p>", "<pre><code>unterminated</pre>"])
def test_extract_code_element_rejects_missing_tags(html: str) -> None:
    with pytest.raises(RenderFailure):
        extract_code_element(html)


@pytest.mark.parametrize("language", ["c/c++", "llvm ir", "x86asm{}"])
def test_markdown_renderer_keeps_unusual_languages_out_of_the_body(language: str) -> None:
    element = extract_code_element(MarkdownRenderer().render("int x;", language))

    assert element.startswith("<code class=")
    assert element.split(">", 1)[1].startswith("int x;")
    assert language not in element.split(">", 1)[1]


def test_markdown_renderer_escapes_unusual_language_in_class() -> None:
    element = extract_code_element(MarkdownRenderer().render("x", 'a"b<c'))

    assert element.startswith('<code class="language-a&quot;b&lt;c">')


def test_markdown_renderer_keeps_tabs() -> None:
    body = "func main() {\n\tprintln()\n}"

    element = extract_code_element(MarkdownRenderer().render(body, "go"))

    assert "\n\tprintln()\n" in element
    assert "    println()" not in element


def test_markdown_renderer_keeps_tabs_when_body_uses_private_use_characters() -> None:
    body = "\ue000\tx"

    element = extract_code_element(MarkdownRenderer().render(body, "text"))

    assert "\ue000\tx" in element
