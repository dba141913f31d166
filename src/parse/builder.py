"""Language-agnostic model builder driven by parse-tree traversal events.

A language listener translates enter/exit callbacks into the operations
below. The builder owns all per-file traversal state: the scope stack, the
name resolver and the suppression state. When one declaration names several
variables, the scope stack groups the resulting siblings so that the
declaration's exit finalizes all of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import structlog

from model.components import Component, ComponentKind
from model.diagnostics import DiagnosticKind
from model.invocations import (
    AnnotationInvocation,
    ThrownException,
    TypeDeclaration,
    TypeExtension,
    TypeImplementation,
    TypeParameterBinding,
)
from model.references import TypeReference
from parse.name_resolution import NameResolver
from parse.scope import ScopeStack

if TYPE_CHECKING:
    from model.source_model import SourceModel

logger = structlog.get_logger()

SuppressionMode = Literal["flag", "depth"]


class Suppression:
    """Tracks whether the walk is inside a subtree the model ignores.

    In ``"flag"`` mode entering sets the flag and any exit clears it, so a
    suppressed construct nested in another one ends suppression early. The
    ``"depth"`` mode counts enters and exits instead.
    """

    def __init__(self, mode: SuppressionMode = "flag") -> None:
        self.mode = mode
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    def enter(self) -> None:
        if self.mode == "depth":
            self._depth += 1
        else:
            self._depth = 1

    def exit(self) -> None:
        if self.mode == "depth":
            self._depth = max(0, self._depth - 1)
        else:
            self._depth = 0


class ModelBuilder:
    """Builds components for one compilation unit into a ``SourceModel``."""

    def __init__(
        self,
        model: SourceModel,
        *,
        path: str | None = None,
        suppression: SuppressionMode = "flag",
        resolver: NameResolver | None = None,
    ) -> None:
        self.model = model
        self.path = path
        self.scope = ScopeStack()
        self.resolver = resolver if resolver is not None else NameResolver()
        self.suppression = Suppression(suppression)

    @property
    def suppressed(self) -> bool:
        return self.suppression.active

    @property
    def completion_count(self) -> int:
        """How many components the next ``close_component`` finalizes."""
        return self.scope.group_size() if self.scope else 1

    # -- compilation unit ---------------------------------------------------

    def begin_package(
        self,
        name: str,
        *,
        start_line: int,
        end_line: int,
        code: str = "",
        comment: str | None = None,
    ) -> Component:
        """Open the package component that parents a file's top-level types."""
        if self.scope:
            self.model.diagnostics.record(
                DiagnosticKind.ANOMALOUS_SCOPE_REENTRY,
                (
                    f"package declaration {name!r} found while "
                    f"{len(self.scope)} component(s) are still open"
                ),
                path=self.path,
                line=start_line,
                names=tuple(n for n, _ in self.scope.open_names()),
            )
            self.scope.clear()
        self.resolver.enter_package(name)

        package = Component(
            kind=ComponentKind.PACKAGE,
            short_name=name,
            package_name=name,
            source_file=self.path,
            code=code,
            comment=comment,
            start_line=start_line,
            end_line=end_line,
        )
        self.scope.push(package)
        return package

    def add_import(self, name: str) -> None:
        self.resolver.add_import(name)

    def end_compilation_unit(self) -> None:
        """Finalize whatever is still open, normally just the package."""
        while self.scope:
            self.close_component()

    # -- component lifecycle ------------------------------------------------

    def open_component(
        self,
        kind: ComponentKind,
        *,
        start_line: int,
        end_line: int,
        code: str = "",
        comment: str | None = None,
        short_name: str | None = None,
        with_imports: bool = False,
    ) -> Component | None:
        if self.suppressed:
            return None
        component = Component(
            kind=kind,
            short_name=short_name,
            package_name=self.resolver.package,
            source_file=self.path,
            code=code,
            comment=comment,
            start_line=start_line,
            end_line=end_line,
            imports=self.resolver.imports if with_imports else [],
        )
        self.scope.push(component)
        return component

    def current(self) -> Component:
        """The innermost open component; raises ``ScopeUnderflowError``."""
        return self.scope.peek()

    def current_kind(self) -> ComponentKind | None:
        if not self.scope:
            return None
        return self.scope.peek().kind

    def name_declarator(self, identifier: str) -> None:
        """Name the current component, or stamp out a sibling if it has a name.

        The first declarator of a declaration names the component in progress.
        Every later one pushes a snapshot of it, named ``identifier``, on top
        in the same declaration group, so that the declaration's exit event
        finalizes all siblings together. Components opened inside a later
        declarator's initializer are not part of the group.
        """
        if self.suppressed:
            return
        current = self.current()
        if not current.short_name:
            current.short_name = identifier
            return
        sibling = current.snapshot()
        sibling.short_name = identifier
        self.scope.push_sibling(sibling)

    def close_component(self) -> None:
        """Finalize the top component and its declaration siblings."""
        if self.suppressed:
            return
        for _ in range(self.scope.group_size()):
            qualified_name = self.scope.qualified_name_of_top()
            completed = self.scope.pop()
            completed.finalize_name(qualified_name)

            parent_name = qualified_name.rpartition(".")[0]
            parent: Component | None = None
            if parent_name:
                for open_name, candidate in self.scope.open_names():
                    if open_name == parent_name:
                        parent = candidate
                        break
            if parent is not None:
                parent.add_child(completed, parent_name)
            self.model.insert(completed, parent=parent)
            logger.debug(
                "component_finalized",
                name=qualified_name,
                kind=completed.kind.value,
                path=self.path,
            )

    # -- suppression --------------------------------------------------------

    def enter_suppressed(self) -> None:
        self.suppression.enter()

    def exit_suppressed(self) -> None:
        self.suppression.exit()

    # -- enrichment of the current component ---------------------------------

    def resolve(self, token: str) -> str:
        return self.resolver.resolve(token, suppressed=self.suppressed)

    def add_modifier(self, modifier: str) -> None:
        if self.suppressed:
            return
        self.current().modifiers.add(modifier)

    def set_value(self, value: str) -> None:
        if self.suppressed:
            return
        self.current().value = value

    def set_declaration_type_snippet(self, snippet: str) -> None:
        if self.suppressed:
            return
        self.current().set_declaration_type_snippet(snippet)

    def record_type_reference(self, token: str, line: int) -> str | None:
        if self.suppressed:
            return None
        resolved = self.resolve(token)
        self.current().external_type_references.append(
            TypeReference(resolved_name=resolved, line=line)
        )
        return resolved

    def record_declaration_type(self, token: str, line: int) -> None:
        if self.suppressed:
            return
        self.current().invocations.append(
            TypeDeclaration(invoked_component=self.resolve(token), line=line)
        )

    def record_extension(self, token: str, line: int) -> None:
        if self.suppressed:
            return
        resolved = self.resolve(token)
        current = self.current()
        current.super_types.append(resolved)
        current.invocations.append(
            TypeExtension(invoked_component=resolved, line=line)
        )

    def record_implementation(self, token: str, line: int) -> None:
        if self.suppressed:
            return
        resolved = self.resolve(token)
        current = self.current()
        current.implemented_types.append(resolved)
        current.invocations.append(
            TypeImplementation(invoked_component=resolved, line=line)
        )

    def record_thrown_exception(self, token: str, line: int) -> None:
        if self.suppressed:
            return
        resolved = self.resolve(token)
        current = self.current()
        current.thrown_exceptions.append(resolved)
        current.invocations.append(
            ThrownException(invoked_component=resolved, line=line)
        )

    def record_type_parameter(self, token: str, line: int) -> None:
        if self.suppressed:
            return
        self.current().invocations.append(
            TypeParameterBinding(invoked_component=self.resolve(token), line=line)
        )

    def record_annotation(
        self, name: str, values: dict[str, str], line: int
    ) -> None:
        if self.suppressed:
            return
        self.current().invocations.append(
            AnnotationInvocation(
                invoked_component=self.resolve(name),
                line=line,
                annotations=[(name, values)],
            )
        )


__all__ = ["ModelBuilder", "Suppression", "SuppressionMode"]
