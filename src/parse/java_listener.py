"""Java listener: turns tree-sitter Java traversal events into model components."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from model.components import ComponentKind
from parse.builder import ModelBuilder, SuppressionMode
from parse.treesitter_java import parse_java
from parse.walker import TreeWalker

if TYPE_CHECKING:
    from tree_sitter import Node

    from model.source_model import SourceModel

logger = structlog.get_logger()

_COMMENT_TYPES = frozenset({"block_comment", "line_comment", "comment"})
_PRIMITIVE_TYPES = frozenset({"integral_type", "floating_point_type", "boolean_type"})
_DECLARATOR_OWNERS = frozenset(
    {
        "field_declaration",
        "constant_declaration",
        "local_variable_declaration",
        "spread_parameter",
    }
)
_INFERRED_TYPE_OWNERS = frozenset(
    {"local_variable_declaration", "enhanced_for_statement", "resource"}
)


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="replace")


def _start_line(node: Node) -> int:
    return node.start_point[0] + 1


def _end_line(node: Node) -> int:
    return node.end_point[0] + 1


def _preceding_comment(node: Node) -> str | None:
    """Return the block comment directly above ``node``, skipping line comments."""
    sibling = node.prev_named_sibling
    while sibling is not None and sibling.type in _COMMENT_TYPES:
        text = _text(sibling)
        if text.startswith("/*"):
            return text
        sibling = sibling.prev_named_sibling
    return None


def _type_name(node: Node | None) -> str | None:
    """Bare name of a type node: no generic arguments, array dimensions or annotations."""
    if node is None:
        return None
    if node.type == "type_identifier" or node.type in _PRIMITIVE_TYPES:
        return _text(node)
    if node.type == "void_type":
        return "void"
    if node.type == "scoped_type_identifier":
        parts = [_type_name(child) for child in node.named_children]
        return ".".join(part for part in parts if part)
    if node.type == "generic_type":
        return _type_name(node.named_children[0]) if node.named_children else None
    if node.type == "array_type":
        return _type_name(node.child_by_field_name("element"))
    if node.type == "annotated_type":
        return _type_name(node.named_children[-1]) if node.named_children else None
    return None


def _is_inferred_type(node: Node) -> bool:
    """True for the ``var`` placeholder of a local type-inferred declaration."""
    parent = node.parent
    return (
        node.type == "type_identifier"
        and _text(node) == "var"
        and parent is not None
        and parent.type in _INFERRED_TYPE_OWNERS
        and parent.child_by_field_name("type") == node
    )


def _type_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if _type_name(child) is not None]


def _declared_type(node: Node) -> Node | None:
    type_node = node.child_by_field_name("type")
    if type_node is not None:
        return type_node
    # spread_parameter carries its type without a field name
    types = _type_children(node)
    return types[0] if types else None


class JavaListener:
    """Callbacks for the tree-sitter Java grammar, fired by ``TreeWalker``."""

    def __init__(self, builder: ModelBuilder) -> None:
        self.builder = builder

    # -- helpers --------------------------------------------------------------

    def _open(
        self,
        node: Node,
        kind: ComponentKind,
        *,
        named: bool = True,
        with_imports: bool = False,
    ) -> None:
        name_node = node.child_by_field_name("name") if named else None
        self.builder.open_component(
            kind,
            start_line=_start_line(node),
            end_line=_end_line(node),
            code=_text(node),
            comment=_preceding_comment(node),
            short_name=_text(name_node) or None,
            with_imports=with_imports,
        )

    def _close(self, _node: Node) -> None:
        self.builder.close_component()

    def _declare_type(self, node: Node) -> None:
        """Record the declared type of a member or variable declaration."""
        if self.builder.suppressed:
            return
        type_node = _declared_type(node)
        if type_node is None:
            return
        self.builder.set_declaration_type_snippet(_text(type_node))
        if _is_inferred_type(type_node):
            return
        name = _type_name(type_node)
        if name and name != "void":
            self.builder.record_declaration_type(name, _start_line(type_node))

    # -- compilation unit -----------------------------------------------------

    def enter_package_declaration(self, node: Node) -> None:
        name_node = next(
            (
                child
                for child in node.named_children
                if child.type in ("identifier", "scoped_identifier")
            ),
            None,
        )
        program = node.parent if node.parent is not None else node
        self.builder.begin_package(
            _text(name_node),
            start_line=_start_line(node),
            end_line=_end_line(program),
            code=_text(node),
            comment=_preceding_comment(node),
        )

    def enter_import_declaration(self, node: Node) -> None:
        name_node = next(
            (
                child
                for child in node.named_children
                if child.type in ("identifier", "scoped_identifier")
            ),
            None,
        )
        name = _text(name_node)
        if any(child.type == "asterisk" for child in node.named_children):
            name = f"{name}.*"
        self.builder.add_import(name)

    def exit_program(self, _node: Node) -> None:
        self.builder.end_compilation_unit()

    # -- suppressed constructs ---------------------------------------------------

    def enter_annotation_type_declaration(self, _node: Node) -> None:
        self.builder.enter_suppressed()

    def exit_annotation_type_declaration(self, _node: Node) -> None:
        self.builder.exit_suppressed()

    # -- type declarations ---------------------------------------------------

    def enter_class_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.CLASS, with_imports=True)

    def enter_record_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.CLASS, with_imports=True)

    def enter_interface_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.INTERFACE, with_imports=True)

    def enter_enum_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.ENUM, with_imports=True)

    def enter_enum_constant(self, node: Node) -> None:
        self._open(node, ComponentKind.ENUM_CONSTANT)

    exit_class_declaration = _close
    exit_record_declaration = _close
    exit_interface_declaration = _close
    exit_enum_declaration = _close
    exit_enum_constant = _close

    def enter_superclass(self, node: Node) -> None:
        for type_node in _type_children(node):
            self.builder.record_extension(_type_name(type_node), _start_line(type_node))

    def enter_super_interfaces(self, node: Node) -> None:
        for type_list in node.named_children:
            for type_node in _type_children(type_list):
                self.builder.record_implementation(
                    _type_name(type_node), _start_line(type_node)
                )

    def enter_extends_interfaces(self, node: Node) -> None:
        for type_list in node.named_children:
            for type_node in _type_children(type_list):
                self.builder.record_extension(
                    _type_name(type_node), _start_line(type_node)
                )

    def enter_type_parameters(self, node: Node) -> None:
        if self.builder.suppressed:
            return
        kind = self.builder.current_kind()
        if kind is not None and kind.is_base:
            self.builder.set_declaration_type_snippet(_text(node))

    # -- members -----------------------------------------------------------------

    def enter_method_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.METHOD)
        self._declare_type(node)

    def enter_constructor_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.CONSTRUCTOR)

    def enter_compact_constructor_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.CONSTRUCTOR)

    exit_method_declaration = _close
    exit_constructor_declaration = _close
    exit_compact_constructor_declaration = _close

    def enter_throws(self, node: Node) -> None:
        for type_node in _type_children(node):
            self.builder.record_thrown_exception(
                _type_name(type_node), _start_line(type_node)
            )

    def _parameter_kind(self) -> ComponentKind:
        enclosing = self.builder.current_kind()
        if enclosing == ComponentKind.CONSTRUCTOR:
            return ComponentKind.CONSTRUCTOR_PARAMETER
        if enclosing == ComponentKind.CLASS:
            # record components
            return ComponentKind.FIELD
        return ComponentKind.METHOD_PARAMETER

    @staticmethod
    def _is_lambda_parameter(node: Node) -> bool:
        parameters = node.parent
        return (
            parameters is not None
            and parameters.parent is not None
            and parameters.parent.type == "lambda_expression"
        )

    def enter_formal_parameter(self, node: Node) -> None:
        if self._is_lambda_parameter(node):
            return
        self._open(node, self._parameter_kind())
        self._declare_type(node)

    def exit_formal_parameter(self, node: Node) -> None:
        if self._is_lambda_parameter(node):
            return
        self.builder.close_component()

    def enter_spread_parameter(self, node: Node) -> None:
        # named by its variable_declarator
        self._open(node, self._parameter_kind(), named=False)
        self._declare_type(node)

    exit_spread_parameter = _close

    def enter_field_declaration(self, node: Node) -> None:
        if self.builder.current_kind() == ComponentKind.INTERFACE:
            kind = ComponentKind.INTERFACE_CONSTANT
        else:
            kind = ComponentKind.FIELD
        self._open(node, kind, named=False)
        self._declare_type(node)

    def enter_constant_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.INTERFACE_CONSTANT, named=False)
        self._declare_type(node)

    def enter_local_variable_declaration(self, node: Node) -> None:
        self._open(node, ComponentKind.LOCAL_VARIABLE, named=False)
        self._declare_type(node)

    exit_field_declaration = _close
    exit_constant_declaration = _close
    exit_local_variable_declaration = _close

    def enter_variable_declarator(self, node: Node) -> None:
        if node.parent is None or node.parent.type not in _DECLARATOR_OWNERS:
            return
        self.builder.name_declarator(_text(node.child_by_field_name("name")))
        value = node.child_by_field_name("value")
        if value is not None:
            self.builder.set_value(_text(value))

    def enter_modifiers(self, node: Node) -> None:
        for child in node.children:
            if not child.is_named:
                self.builder.add_modifier(_text(child))

    # -- annotations -------------------------------------------------------------

    def enter_marker_annotation(self, node: Node) -> None:
        name = _text(node.child_by_field_name("name"))
        self.builder.record_annotation(name, {}, _start_line(node))

    def enter_annotation(self, node: Node) -> None:
        name = _text(node.child_by_field_name("name"))
        values: dict[str, str] = {}
        arguments = node.child_by_field_name("arguments")
        if arguments is not None:
            for argument in arguments.named_children:
                if argument.type == "element_value_pair":
                    key = _text(argument.child_by_field_name("key"))
                    values[key] = _text(argument.child_by_field_name("value"))
                elif argument.type not in _COMMENT_TYPES:
                    values[_text(argument)] = ""
        self.builder.record_annotation(name, values, _start_line(node))

    # -- type usages -------------------------------------------------------------

    def enter_type_identifier(self, node: Node) -> None:
        parent = node.parent
        if parent is not None and parent.type in (
            "scoped_type_identifier",
            "type_parameter",
        ):
            return
        if _is_inferred_type(node):
            return
        self.builder.record_type_reference(_text(node), _start_line(node))

    def enter_scoped_type_identifier(self, node: Node) -> None:
        parent = node.parent
        if parent is not None and parent.type == "scoped_type_identifier":
            return
        self.builder.record_type_reference(_type_name(node) or _text(node), _start_line(node))

    def _primitive(self, node: Node) -> None:
        self.builder.record_type_reference(_text(node), _start_line(node))

    enter_integral_type = _primitive
    enter_floating_point_type = _primitive
    enter_boolean_type = _primitive

    def enter_type_arguments(self, node: Node) -> None:
        for argument in node.named_children:
            if argument.type == "wildcard":
                bounds = _type_children(argument)
                if not bounds:
                    continue
                argument = bounds[0]
            name = _type_name(argument)
            if name:
                self.builder.record_type_parameter(name, _start_line(argument))

    def enter_type_bound(self, node: Node) -> None:
        for type_node in _type_children(node):
            self.builder.record_type_parameter(
                _type_name(type_node), _start_line(type_node)
            )

    def _receiver(self, node: Node) -> None:
        receiver = node.child_by_field_name("object")
        if receiver is not None and receiver.type == "identifier":
            self.builder.record_type_reference(_text(receiver), _start_line(receiver))

    enter_method_invocation = _receiver
    enter_field_access = _receiver


def walk_java(
    path: str,
    source: str | bytes,
    model: SourceModel,
    *,
    suppression: SuppressionMode = "flag",
    fail_on_syntax_errors: bool = True,
) -> SourceModel:
    """Parse one Java compilation unit and build its components into ``model``."""
    tree = parse_java(path, source, fail_on_syntax_errors=fail_on_syntax_errors)
    builder = ModelBuilder(model, path=path, suppression=suppression)
    logger.debug("walk_started", path=path, language="java")
    TreeWalker().walk(JavaListener(builder), tree.root_node)
    logger.debug("walk_finished", path=path, components=len(model))
    return model


__all__ = ["JavaListener", "walk_java"]
