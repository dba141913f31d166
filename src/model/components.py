"""Component models: the nodes of a source model tree.

This module contains the component kinds and the ``Component`` record that
the model builder creates, enriches while walking a parse tree, and finally
names and attaches to its parent.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from model.invocations import ComponentInvocation
from model.references import TypeReference

ANONYMOUS_NAME = "<anonymous>"


class ComponentKind(str, Enum):
    """Kinds of source constructs represented in the model."""

    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ENUM_CONSTANT = "enum_constant"
    METHOD = "method"
    CONSTRUCTOR = "constructor"
    FIELD = "field"
    INTERFACE_CONSTANT = "interface_constant"
    METHOD_PARAMETER = "method_parameter"
    CONSTRUCTOR_PARAMETER = "constructor_parameter"
    LOCAL_VARIABLE = "local_variable"

    @property
    def is_base(self) -> bool:
        """True for type-level kinds that own members."""
        return self in _BASE_KINDS


_BASE_KINDS = frozenset(
    {
        ComponentKind.PACKAGE,
        ComponentKind.CLASS,
        ComponentKind.INTERFACE,
        ComponentKind.ENUM,
    }
)


class Component(BaseModel):
    """A source construct (type, method, field, ...) in the model."""

    kind: ComponentKind
    short_name: str | None = None
    qualified_name: str | None = None
    package_name: str | None = None
    source_file: str | None = None
    code: str = ""
    comment: str | None = None
    start_line: int = 0
    end_line: int = 0
    modifiers: set[str] = Field(default_factory=set)
    imports: list[str] = Field(default_factory=list)
    super_types: list[str] = Field(default_factory=list)
    implemented_types: list[str] = Field(default_factory=list)
    thrown_exceptions: list[str] = Field(default_factory=list)
    invocations: list[ComponentInvocation] = Field(default_factory=list)
    external_type_references: list[TypeReference] = Field(default_factory=list)
    declaration_type_snippet: str | None = None
    value: str | None = None
    parent_name: str | None = None
    children: list[Component] = Field(default_factory=list)

    @property
    def finalized(self) -> bool:
        return self.qualified_name is not None

    def finalize_name(self, qualified_name: str) -> None:
        """Fix the qualified name. A component is named exactly once."""
        if self.qualified_name is not None:
            msg = (
                f"Component {self.qualified_name!r} is already finalized; "
                f"refusing to rename it to {qualified_name!r}"
            )
            raise ValueError(msg)
        if not self.short_name:
            self.short_name = ANONYMOUS_NAME
        self.qualified_name = qualified_name

    def set_declaration_type_snippet(self, snippet: str) -> None:
        """Record the declared type text unless one was already recorded."""
        if self.declaration_type_snippet is None:
            self.declaration_type_snippet = snippet

    def add_child(self, child: Component, parent_name: str) -> None:
        # The parent may still be open, so its name is passed in.
        child.parent_name = parent_name
        self.children.append(child)

    def snapshot(self) -> Component:
        """Copy everything gathered so far except identity and children.

        Used to stamp out sibling components from one declaration that names
        several variables, so the initializer ``value`` is not carried over
        either. The copy shares no mutable state with ``self``.
        """
        return self.model_copy(
            update={
                "short_name": None,
                "qualified_name": None,
                "parent_name": None,
                "value": None,
                "modifiers": set(self.modifiers),
                "imports": list(self.imports),
                "super_types": list(self.super_types),
                "implemented_types": list(self.implemented_types),
                "thrown_exceptions": list(self.thrown_exceptions),
                "invocations": list(self.invocations),
                "external_type_references": list(self.external_type_references),
                "children": [],
            }
        )


Component.model_rebuild()

__all__ = ["ANONYMOUS_NAME", "Component", "ComponentKind"]
