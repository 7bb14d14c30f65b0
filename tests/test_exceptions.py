from __future__ import annotations

import logging

import pytest

from mdbook_godbolt.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    format_event_message,
)
from mdbook_godbolt.core.exceptions import ChapterProcessingError, GodboltError


def test_chapter_error_names_chapter() -> None:
    error = ChapterProcessingError("Intro", "renderer output contains no <code> element")

    assert isinstance(error, GodboltError)
    assert error.chapter == "Intro"
    assert str(error) == "chapter 'Intro': renderer output contains no <code> element"


def test_format_event_message() -> None:
    assert format_event_message("chapter_rendered", {"chapter": "Intro", "blocks": 1}) == (
        "Rewrote 1 godbolt block in 'Intro'"
    )
    assert format_event_message("chapter_rendered", {"chapter": "Intro", "blocks": 3}) == (
        "Rewrote 3 godbolt blocks in 'Intro'"
    )
    assert format_event_message("block_skipped", {"info": "rust"}) is None


def test_logging_emitter_reports_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("godbolt_emitter_test"))

    with caplog.at_level(logging.DEBUG, logger="godbolt_emitter_test"):
        emitter.event("draft_skipped", {"chapter": "Draft"})
        emitter.event("block_skipped", {"info": "rust"})

    messages = [record.getMessage() for record in caplog.records]
    assert "Skipping draft chapter 'Draft'" in messages
    assert "diagnostic event block_skipped: {'info': 'rust'}" in messages


def test_logging_emitter_satisfies_protocol() -> None:
    assert isinstance(LoggingEmitter(), DiagnosticEmitter)
