from __future__ import annotations

from mdbook_godbolt.core.blocks import CodeBlockSpan
from mdbook_godbolt.core.patch import PatchEntry, apply_patches


CONTENT = "aaa[first]bbb[second]ccc"


def _patches() -> tuple[PatchEntry, PatchEntry]:
    first = CodeBlockSpan(CONTENT.index("[first]"), CONTENT.index("[first]") + len("[first]"))
    second = CodeBlockSpan(CONTENT.index("[second]"), CONTENT.index("[second]") + len("[second]"))
    return PatchEntry(first, "<1 is much longer>"), PatchEntry(second, "2")


def test_no_patches_returns_content() -> None:
    assert apply_patches(CONTENT, []) == CONTENT


def test_patches_replace_only_their_spans() -> None:
    assert apply_patches(CONTENT, list(_patches())) == "aaa<1 is much longer>bbb2ccc"


def test_patch_order_does_not_matter() -> None:
    first, second = _patches()

    assert apply_patches(CONTENT, [first, second]) == apply_patches(CONTENT, [second, first])


def test_patch_at_content_edges() -> None:
    content = "XXmiddleYY"
    patches = [
        PatchEntry(CodeBlockSpan(0, 2), "<"),
        PatchEntry(CodeBlockSpan(8, 10), ">"),
    ]

    assert apply_patches(content, patches) == "<middle>"
