"""Build source models from (path, source text) pairs."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import structlog

from compiler.config import SourceModelConfig
from compiler.languages import LanguageWalker, get_walker
from compiler.logging import configure_logging
from model.diagnostics import DiagnosticKind, Diagnostics
from model.errors import MalformedInputError, NameCollisionError, ScopeUnderflowError
from model.source_model import SourceModel

logger = structlog.get_logger()

SourceFile = tuple[str, str | bytes]


@dataclass
class FileResult:
    """Outcome of walking one file in isolation."""

    path: str
    model: SourceModel | None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return self.model is not None


def _walk_file(
    walker: LanguageWalker,
    path: str,
    source: str | bytes,
    config: SourceModelConfig,
) -> FileResult:
    """Walk one file into its own model.

    Per-file failures are turned into error diagnostics; the file then
    contributes no components.
    """
    diagnostics = Diagnostics()
    model = SourceModel(diagnostics, collision_policy=config.name_collisions)
    try:
        walker(
            path,
            source,
            model,
            suppression=config.suppression,
            fail_on_syntax_errors=config.fail_on_syntax_errors,
        )
    except MalformedInputError as exc:
        diagnostics.record(
            DiagnosticKind.MALFORMED_INPUT,
            str(exc),
            severity="error",
            path=path,
            line=exc.line,
        )
        return FileResult(path=path, model=None, diagnostics=diagnostics)
    except ScopeUnderflowError as exc:
        diagnostics.record(
            DiagnosticKind.SCOPE_UNDERFLOW,
            f"walk aborted: {exc}",
            severity="error",
            path=path,
        )
        return FileResult(path=path, model=None, diagnostics=diagnostics)
    except NameCollisionError as exc:
        diagnostics.record(
            DiagnosticKind.NAME_COLLISION,
            f"walk aborted: {exc}",
            severity="error",
            path=path,
            names=(exc.name,),
        )
        return FileResult(path=path, model=None, diagnostics=diagnostics)

    return FileResult(path=path, model=model, diagnostics=diagnostics)


def _apply_config(config: SourceModelConfig | None) -> SourceModelConfig:
    if config is None:
        return SourceModelConfig()
    configure_logging(config.log_level)
    return config


def build_file(
    language: str,
    path: str,
    source: str | bytes,
    *,
    config: SourceModelConfig | None = None,
) -> FileResult:
    """Walk a single file of ``language`` into its own model.

    A supplied ``config`` also sets the logging level, as in ``build_model``.
    """
    config = _apply_config(config)
    return _walk_file(get_walker(language), path, source, config)


def build_model(
    language: str,
    files: Iterable[SourceFile],
    *,
    config: SourceModelConfig | None = None,
    diagnostics: Diagnostics | None = None,
) -> SourceModel:
    """Build one source model from every file of ``language``.

    Files are walked independently (in parallel when ``config.max_workers``
    allows) and merged in input order by this function alone, so the result
    does not depend on which walk finishes first. A supplied ``config``
    reconfigures logging to its ``log_level``; without one the current
    logging setup is left alone.

    Raises:
        UnsupportedLanguageError: if no walker is registered for ``language``.
    """
    config = _apply_config(config)
    walker = get_walker(language)
    pending = list(files)

    if config.max_workers == 1 or len(pending) <= 1:
        results = [
            _walk_file(walker, path, source, config) for path, source in pending
        ]
    else:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            results = list(
                executor.map(
                    lambda item: _walk_file(walker, item[0], item[1], config),
                    pending,
                )
            )

    aggregate = SourceModel(diagnostics, collision_policy=config.name_collisions)
    for result in results:
        aggregate.diagnostics.extend(result.diagnostics)
        if result.model is not None:
            aggregate.merge(result.model)

    logger.info(
        "model_built",
        language=language,
        files=len(pending),
        failed=sum(1 for result in results if not result.ok),
        components=len(aggregate),
    )
    return aggregate


__all__ = ["FileResult", "SourceFile", "build_file", "build_model"]
