"""Tree-sitter parsing of Java source text."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_java import language as get_java_language

from model.errors import MalformedInputError

if TYPE_CHECKING:
    from tree_sitter import Tree

_LANGUAGE: Language | None = None
_LOCAL = threading.local()


def _get_parser() -> Parser:
    """Return this thread's Tree-sitter parser for Java, creating it once."""
    global _LANGUAGE
    if _LANGUAGE is None:
        _LANGUAGE = Language(get_java_language())

    parser: Parser | None = getattr(_LOCAL, "parser", None)
    if parser is None:
        parser = Parser(_LANGUAGE)
        _LOCAL.parser = parser
    return parser


def _first_error(node: Node) -> Node | None:
    """Return the first ERROR or missing node below ``node``, if any."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def parse_java(
    path: str,
    source: str | bytes,
    *,
    fail_on_syntax_errors: bool = True,
) -> Tree:
    """Parse Java ``source`` into a tree-sitter tree.

    Raises:
        MalformedInputError: if ``source`` is bytes that are not valid UTF-8,
            or if the tree contains syntax errors and ``fail_on_syntax_errors``
            is set.
    """
    if isinstance(source, bytes):
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"source is not valid UTF-8: {exc}"
            raise MalformedInputError(path, msg) from exc
        source_bytes = source
    else:
        source_bytes = source.encode("utf-8")

    tree = _get_parser().parse(source_bytes)

    if fail_on_syntax_errors and tree.root_node.has_error:
        error = _first_error(tree.root_node)
        line = error.start_point[0] + 1 if error is not None else None
        raise MalformedInputError(path, "source contains syntax errors", line=line)

    return tree


__all__ = ["parse_java"]
