"""Depth-first traversal that fires enter/exit callbacks on a listener."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tree_sitter import Node


class TreeListener(Protocol):
    """Callbacks are looked up by node type: ``enter_<type>`` / ``exit_<type>``.

    Listeners only define the callbacks they care about. The optional
    ``enter_every_rule`` / ``exit_every_rule`` hooks run around every node.
    """


class TreeWalker:
    """Walk named nodes depth-first.

    ``enter_X`` for a node fires before any event of its descendants and
    ``exit_X`` fires after all of them and before the next sibling is entered.
    The walk keeps an explicit stack instead of recursing.
    """

    def walk(self, listener: TreeListener, root: Node) -> None:
        stack: list[tuple[Node, bool]] = [(root, False)]
        while stack:
            node, exiting = stack.pop()
            if exiting:
                self._fire(listener, "exit", node)
                continue

            self._fire(listener, "enter", node)
            stack.append((node, True))
            for child in reversed(node.named_children):
                stack.append((child, False))

    @staticmethod
    def _fire(listener: TreeListener, phase: str, node: Node) -> None:
        every = getattr(listener, f"{phase}_every_rule", None)
        callback = getattr(listener, f"{phase}_{node.type}", None)
        if phase == "enter":
            if every is not None:
                every(node)
            if callback is not None:
                callback(node)
        else:
            if callback is not None:
                callback(node)
            if every is not None:
                every(node)


__all__ = ["TreeListener", "TreeWalker"]
