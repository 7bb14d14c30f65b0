"""Configuration model for the ``[preprocessor.godbolt]`` table of ``book.toml``.

GodboltConfig

`marker` (`str`)
: Keyword flagging a fenced code block as annotated. Qualifier tokens are
  namespaced with it, e.g. `godbolt-compiler:g122`. Must not contain commas
  or whitespace.

`markdown_extensions` (`list[str]`)
: Python-Markdown extensions used to render code bodies. The list must
  contain an extension able to render fenced code blocks.

`element_ids` (`bool`)
: Add a run-unique `id="<marker>-<n>"` attribute to every generated
  `<pre class="godbolt">` element. Off by default.

`supported_renderers` (`list[str]`)
: mdBook renderers for which the preprocessor reports support. Compared
  case-insensitively.

Keys consumed by mdBook itself (`command`, `renderers`, `before`, `after`,
`optional`) and the `assets_version` stamp written by `install` are accepted
and otherwise ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigFailure


PREPROCESSOR_NAME = "godbolt"
DEFAULT_MARKER = "godbolt"


class GodboltConfig(BaseModel):
    """Options controlling how annotated code blocks are rewritten."""

    model_config = ConfigDict(extra="forbid")

    marker: str = DEFAULT_MARKER
    markdown_extensions: list[str] = Field(default_factory=lambda: ["fenced_code"])
    element_ids: bool = False
    supported_renderers: list[str] = Field(default_factory=lambda: ["html"])

    command: str | None = None
    renderers: list[str] | None = None
    before: list[str] = Field(default_factory=list)
    after: list[str] = Field(default_factory=list)
    optional: bool = False
    assets_version: str | None = None

    @field_validator("marker")
    @classmethod
    def _check_marker(cls, value: str) -> str:
        if not value or any(char == "," or char.isspace() for char in value):
            raise ValueError("marker must be a non-empty word without commas or spaces")
        return value

    @classmethod
    def from_table(cls, table: Mapping[str, Any] | None) -> GodboltConfig:
        """Build a configuration from the raw preprocessor table."""
        try:
            return cls.model_validate(dict(table or {}))
        except ValidationError as exc:
            raise ConfigFailure(
                f"invalid [preprocessor.{PREPROCESSOR_NAME}] configuration: {exc}"
            ) from exc

    @classmethod
    def from_book_config(cls, config: Mapping[str, Any] | None) -> GodboltConfig:
        """Extract ``preprocessor.godbolt`` from a parsed ``book.toml`` mapping."""
        preprocessors = (config or {}).get("preprocessor") or {}
        if not isinstance(preprocessors, Mapping):
            raise ConfigFailure("'preprocessor' in book.toml must be a table")
        table = preprocessors.get(PREPROCESSOR_NAME)
        if table is not None and not isinstance(table, Mapping):
            raise ConfigFailure(f"'preprocessor.{PREPROCESSOR_NAME}' must be a table")
        return cls.from_table(table)

    def supports_renderer(self, renderer: str) -> bool:
        """Return whether the preprocessor should run for ``renderer``."""
        wanted = renderer.strip().lower()
        return any(wanted == name.strip().lower() for name in self.supported_renderers)


__all__ = ["DEFAULT_MARKER", "GodboltConfig", "PREPROCESSOR_NAME"]
