"""Scope stack of components that are still being built."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from model.components import ANONYMOUS_NAME
from model.errors import ScopeUnderflowError

if TYPE_CHECKING:
    from model.components import Component


class ScopeStack:
    """Nesting path from the compilation unit down to the current construct.

    Components live in an arena and are addressed by stable indices. Each
    arena slot remembers its parent slot: whatever was on top when it was
    pushed, except for components pushed with ``push_sibling``, which share
    the parent of the component they sit on and join its declaration group.
    The stack itself is a list of arena indices, innermost last.
    """

    def __init__(self) -> None:
        self._arena: list[Component] = []
        self._parents: list[int | None] = []
        self._groups: list[int] = []
        self._stack: list[int] = []

    def push(self, component: Component) -> int:
        parent = self._stack[-1] if self._stack else None
        return self._push(component, parent, None)

    def push_sibling(self, component: Component) -> int:
        """Push ``component`` above the current top, under the same parent."""
        top = self._top_index()
        return self._push(component, self._parents[top], self._groups[top])

    def _push(self, component: Component, parent: int | None, group: int | None) -> int:
        index = len(self._arena)
        self._arena.append(component)
        self._parents.append(parent)
        self._groups.append(index if group is None else group)
        self._stack.append(index)
        return index

    def group_size(self) -> int:
        """Number of open components declared together with the top one."""
        group = self._groups[self._top_index()]
        return sum(1 for index in self._stack if self._groups[index] == group)

    def _top_index(self) -> int:
        if not self._stack:
            msg = "No open component on the scope stack"
            raise ScopeUnderflowError(msg)
        return self._stack[-1]

    def peek(self) -> Component:
        return self._arena[self._top_index()]

    def pop(self) -> Component:
        index = self._top_index()
        self._stack.pop()
        return self._arena[index]

    def clear(self) -> None:
        self._stack.clear()

    def _name_of(self, index: int | None) -> str:
        parts: list[str] = []
        while index is not None:
            parts.append(self._arena[index].short_name or ANONYMOUS_NAME)
            index = self._parents[index]
        return ".".join(reversed(parts))

    def qualified_name_of_top(self) -> str:
        return self._name_of(self._top_index())

    def open_names(self) -> Iterator[tuple[str, Component]]:
        """Yield ``(provisional qualified name, component)``, outermost first."""
        for index in self._stack:
            yield self._name_of(index), self._arena[index]

    def __iter__(self) -> Iterator[Component]:
        for index in self._stack:
            yield self._arena[index]

    def __len__(self) -> int:
        return len(self._stack)

    def __bool__(self) -> bool:
        return bool(self._stack)


__all__ = ["ScopeStack"]
