"""Diagnostics collected while building a source model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

import structlog

logger = structlog.get_logger()

Severity = Literal["error", "warning"]


class DiagnosticKind(str, Enum):
    MALFORMED_INPUT = "malformed_input"
    SCOPE_UNDERFLOW = "scope_underflow"
    NAME_COLLISION = "name_collision"
    ANOMALOUS_SCOPE_REENTRY = "anomalous_scope_reentry"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None
    names: tuple[str, ...] = ()

    def location(self) -> str:
        if self.path is None:
            return "<model>"
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "severity": self.severity,
            "path": self.path,
            "line": self.line,
            "names": list(self.names),
            "message": self.message,
        }


@dataclass
class Diagnostics:
    """Sink for problems found during a build, handed back to the caller."""

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record(
        self,
        kind: DiagnosticKind,
        message: str,
        *,
        severity: Severity = "warning",
        path: str | None = None,
        line: int | None = None,
        names: tuple[str, ...] = (),
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            kind=kind,
            severity=severity,
            message=message,
            path=path,
            line=line,
            names=names,
        )
        if severity == "error":
            self.errors.append(diagnostic)
            logger.error(kind.value, message=message, path=path, line=line)
        else:
            self.warnings.append(diagnostic)
            logger.warning(kind.value, message=message, path=path, line=line)
        return diagnostic

    def extend(self, other: Diagnostics) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in (*self.errors, *self.warnings) if d.kind == kind]


__all__ = ["Diagnostic", "DiagnosticKind", "Diagnostics", "Severity"]
