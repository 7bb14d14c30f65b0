"""Custom exception hierarchy for the godbolt preprocessing pipeline."""

from __future__ import annotations


class GodboltError(RuntimeError):
    """Base exception for preprocessing failures."""


class RenderFailure(GodboltError):
    """Raised when the markdown renderer output holds no ``<code>`` element."""


class ChapterProcessingError(GodboltError):
    """Raised when a chapter cannot be rewritten, aborting the whole run."""

    def __init__(self, chapter: str, message: str) -> None:
        super().__init__(f"chapter '{chapter}': {message}")
        self.chapter = chapter


class DocumentIOFailure(GodboltError):
    """Raised when the book exchanged with mdBook cannot be read or written."""


class ConfigFailure(GodboltError):
    """Raised when configuration is missing, malformed, or invalid."""


class InstallError(GodboltError):
    """Raised when the theme asset or configuration cannot be installed."""


__all__ = [
    "ChapterProcessingError",
    "ConfigFailure",
    "DocumentIOFailure",
    "GodboltError",
    "InstallError",
    "RenderFailure",
]
