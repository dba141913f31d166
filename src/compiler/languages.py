"""Registry of language walkers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from model.errors import UnsupportedLanguageError
from parse.java_listener import walk_java

if TYPE_CHECKING:
    from model.source_model import SourceModel
    from parse.builder import SuppressionMode


class LanguageWalker(Protocol):
    def __call__(
        self,
        path: str,
        source: str | bytes,
        model: SourceModel,
        *,
        suppression: SuppressionMode = ...,
        fail_on_syntax_errors: bool = ...,
    ) -> SourceModel: ...


_WALKERS: dict[str, LanguageWalker] = {
    "java": walk_java,
}


def get_walker(language: str) -> LanguageWalker:
    """Return the walker registered for ``language`` (case-insensitive)."""
    walker = _WALKERS.get(language.strip().lower())
    if walker is None:
        raise UnsupportedLanguageError(language)
    return walker


def supported_languages() -> list[str]:
    return sorted(_WALKERS)


__all__ = ["LanguageWalker", "get_walker", "supported_languages"]
