"""The aggregate source model: qualified name -> component."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Literal

from model.components import ComponentKind
from model.diagnostics import DiagnosticKind, Diagnostics
from model.errors import NameCollisionError

if TYPE_CHECKING:
    from model.components import Component

CollisionPolicy = Literal["last-write-wins", "error"]


class SourceModel:
    """Components of one or many compilation units, keyed by qualified name.

    Inserting a name that is already present is a collision: the newer
    component replaces the older one and a ``name_collision`` diagnostic
    naming both sources is recorded. Under the ``"error"`` policy a
    ``NameCollisionError`` is raised instead. Packages span files, so a
    package that is already present absorbs the newcomer's children, keeping
    only children that are the model's current component for their name.
    """

    def __init__(
        self,
        diagnostics: Diagnostics | None = None,
        *,
        collision_policy: CollisionPolicy = "last-write-wins",
    ) -> None:
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.collision_policy = collision_policy
        self._components: dict[str, Component] = {}

    def insert(self, component: Component, *, parent: Component | None = None) -> None:
        """Add a finalized component.

        ``parent`` is the component ``component`` was attached to when that
        parent is still open and therefore not in the model yet. A component
        replaced by a collision is removed from its parent's ``children``.
        """
        name = component.qualified_name
        if name is None:
            msg = "Only finalized components can be inserted into a source model"
            raise ValueError(msg)

        existing = self._components.get(name)
        if existing is None:
            self._components[name] = component
            return

        if (
            existing.kind == ComponentKind.PACKAGE
            and component.kind == ComponentKind.PACKAGE
        ):
            if existing is not component:
                existing.children[:] = [
                    child
                    for child in (*existing.children, *component.children)
                    if self._components.get(child.qualified_name or "") is child
                ]
            return

        if self.collision_policy == "error":
            raise NameCollisionError(name, component.source_file)

        cross_file = existing.source_file != component.source_file
        self.diagnostics.record(
            DiagnosticKind.NAME_COLLISION,
            (
                f"{name} declared at {_identity(existing)} "
                f"is replaced by {_identity(component)}"
            ),
            severity="error" if cross_file else "warning",
            path=component.source_file,
            line=component.start_line,
            names=(_identity(existing), _identity(component)),
        )
        self._components[name] = component
        self._detach(existing, parent)

    def _detach(self, replaced: Component, parent: Component | None) -> None:
        owners: list[Component | None] = [parent]
        if replaced.parent_name is not None:
            owners.append(self._components.get(replaced.parent_name))
        for owner in owners:
            if owner is not None:
                owner.children[:] = [c for c in owner.children if c is not replaced]

    def merge(self, other: SourceModel) -> None:
        """Insert every component of ``other`` in its insertion order.

        Under the ``"error"`` policy a colliding component is not inserted;
        an error diagnostic is recorded and the existing component is kept.
        """
        for component in other._components.values():
            try:
                self.insert(component)
            except NameCollisionError as exc:
                self.diagnostics.record(
                    DiagnosticKind.NAME_COLLISION,
                    f"{exc}; keeping {_identity(self._components[exc.name])}",
                    severity="error",
                    path=component.source_file,
                    line=component.start_line,
                    names=(
                        _identity(self._components[exc.name]),
                        _identity(component),
                    ),
                )

    @property
    def components(self) -> Mapping[str, Component]:
        return MappingProxyType(self._components)

    def get(self, name: str) -> Component | None:
        return self._components.get(name)

    def items(self):
        return self._components.items()

    def roots(self) -> list[Component]:
        """Top-level components; every other component hangs below one of them."""
        return [c for c in self._components.values() if c.parent_name is None]

    def of_kind(self, kind: ComponentKind) -> list[Component]:
        return [c for c in self._components.values() if c.kind == kind]

    def __getitem__(self, name: str) -> Component:
        return self._components[name]

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceModel):
            return NotImplemented
        return self._components == other._components

    def __repr__(self) -> str:
        return f"SourceModel({len(self._components)} components)"


def _identity(component: Component) -> str:
    return f"{component.source_file or '<unknown>'}:{component.start_line}"


__all__ = ["CollisionPolicy", "SourceModel"]
