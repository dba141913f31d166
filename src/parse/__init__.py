"""Parse-tree walking and model building."""

from parse.builder import ModelBuilder, Suppression
from parse.java_listener import JavaListener, walk_java
from parse.name_resolution import JAVA_DEFAULT_TYPES, NameResolver
from parse.scope import ScopeStack
from parse.treesitter_java import parse_java
from parse.walker import TreeWalker

__all__ = [
    "JAVA_DEFAULT_TYPES",
    "JavaListener",
    "ModelBuilder",
    "NameResolver",
    "ScopeStack",
    "Suppression",
    "TreeWalker",
    "parse_java",
    "walk_java",
]
