"""Diagnostic abstractions shared across the preprocessing pipeline."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface structured pipeline events."""

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(self, *, logger_obj: logging.Logger | None = None) -> None:
        self._logger = logger_obj or logger

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "chapter_rendered":
        chapter = data.get("chapter") or "<unnamed>"
        count = data.get("blocks", 0)
        noun = "block" if count == 1 else "blocks"
        return f"Rewrote {count} godbolt {noun} in '{chapter}'"

    if name == "block_skipped":
        # Non-annotated fences are ordinary content, keep them out of INFO.
        return None

    if name == "draft_skipped":
        chapter = data.get("chapter") or "<unnamed>"
        return f"Skipping draft chapter '{chapter}'"

    return None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "format_event_message",
]
