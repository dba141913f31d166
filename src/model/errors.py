"""Exceptions raised while building a source model."""

from __future__ import annotations


class SourceModelError(Exception):
    """Base exception for all source model errors."""


class UnsupportedLanguageError(SourceModelError):
    """Raised when no walker is registered for the requested language."""

    def __init__(self, language: str) -> None:
        super().__init__(f"No walker registered for language: {language}")
        self.language = language


class MalformedInputError(SourceModelError):
    """Raised when source text cannot be turned into a usable parse tree."""

    def __init__(self, path: str, message: str, line: int | None = None) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.line = line


class ScopeUnderflowError(SourceModelError):
    """Raised when a construct needs an open component but the scope is empty."""


class NameCollisionError(SourceModelError):
    """Raised for duplicate qualified names under the strict collision policy."""

    def __init__(self, name: str, path: str | None = None) -> None:
        super().__init__(f"Duplicate component name: {name}")
        self.name = name
        self.path = path


__all__ = [
    "MalformedInputError",
    "NameCollisionError",
    "ScopeUnderflowError",
    "SourceModelError",
    "UnsupportedLanguageError",
]
