from __future__ import annotations

import pytest
from pydantic import ValidationError

from model.components import ANONYMOUS_NAME, Component, ComponentKind
from model.invocations import (
    AnnotationInvocation,
    EmptyInvocation,
    ThrownException,
    TypeDeclaration,
    TypeExtension,
    parse_invocation,
)
from model.references import TypeReference


def _field(**overrides: object) -> Component:
    values: dict[str, object] = {
        "kind": ComponentKind.FIELD,
        "package_name": "pkg",
        "code": "private int a, b;",
        "start_line": 3,
        "end_line": 3,
    }
    values.update(overrides)
    return Component(**values)


def test_finalize_name_is_set_exactly_once() -> None:
    component = _field(short_name="a")

    component.finalize_name("pkg.Foo.a")

    assert component.finalized
    assert component.qualified_name == "pkg.Foo.a"
    with pytest.raises(ValueError, match="already finalized"):
        component.finalize_name("pkg.Foo.b")


def test_finalize_name_gives_unnamed_components_a_placeholder() -> None:
    component = _field()

    component.finalize_name(f"pkg.Foo.{ANONYMOUS_NAME}")

    assert component.short_name == ANONYMOUS_NAME


def test_declaration_type_snippet_first_writer_wins() -> None:
    component = _field()

    component.set_declaration_type_snippet("List<String>")
    component.set_declaration_type_snippet("String")

    assert component.declaration_type_snippet == "List<String>"


def test_snapshot_copies_gathered_state_without_identity() -> None:
    original = _field(short_name="a", value="1")
    original.modifiers.add("private")
    original.set_declaration_type_snippet("int")
    original.external_type_references.append(TypeReference(resolved_name="int", line=3))
    original.invocations.append(TypeDeclaration(invoked_component="int", line=3))

    copy = original.snapshot()

    assert copy.short_name is None
    assert copy.qualified_name is None
    assert copy.modifiers == {"private"}
    assert copy.declaration_type_snippet == "int"
    assert copy.value is None
    assert copy.external_type_references == original.external_type_references
    assert copy.invocations == original.invocations
    assert copy.children == []


def test_snapshot_is_isolated_from_later_mutation() -> None:
    original = _field(short_name="a")
    original.modifiers.add("private")

    copy = original.snapshot()
    original.modifiers.add("static")
    original.super_types.append("pkg.Base")
    original.external_type_references.append(TypeReference(resolved_name="int", line=3))

    assert copy.modifiers == {"private"}
    assert copy.super_types == []
    assert copy.external_type_references == []


def test_add_child_records_parent_name() -> None:
    parent = Component(kind=ComponentKind.CLASS, short_name="Foo")
    child = _field(short_name="a")

    parent.add_child(child, "pkg.Foo")

    assert parent.children == [child]
    assert child.parent_name == "pkg.Foo"


def test_kind_is_base_for_type_level_kinds() -> None:
    assert ComponentKind.CLASS.is_base
    assert ComponentKind.PACKAGE.is_base
    assert not ComponentKind.METHOD.is_base
    assert not ComponentKind.LOCAL_VARIABLE.is_base


def test_type_reference_is_an_immutable_value() -> None:
    ref = TypeReference(resolved_name="java.lang.String", line=4)

    assert ref == TypeReference(resolved_name="java.lang.String", line=4)
    assert ref != TypeReference(resolved_name="java.lang.String", line=5)
    with pytest.raises(ValidationError):
        ref.line = 7  # type: ignore[misc]


@pytest.mark.parametrize(
    ("invocation", "expected"),
    [
        (EmptyInvocation(), True),
        (TypeExtension(invoked_component="  "), True),
        (TypeExtension(invoked_component="pkg.Bar"), False),
        (AnnotationInvocation(), True),
        (AnnotationInvocation(annotations=[("Override", {})]), False),
        (AnnotationInvocation(invoked_component="java.lang.Override"), False),
    ],
)
def test_invocation_emptiness(invocation: object, expected: bool) -> None:
    assert invocation.is_empty() is expected  # type: ignore[attr-defined]


def test_parse_invocation_picks_variant_from_kind() -> None:
    invocation = parse_invocation(
        {"kind": "exception", "invoked_component": "java.io.IOException", "line": 9}
    )

    assert isinstance(invocation, ThrownException)
    assert invocation.invoked_component == "java.io.IOException"


def test_parse_invocation_rejects_unknown_kind() -> None:
    with pytest.raises(ValidationError):
        parse_invocation({"kind": "inheritance", "invoked_component": "pkg.Bar"})


def test_component_validates_invocations_by_kind() -> None:
    component = _field(
        invocations=[
            {
                "kind": "annotation",
                "invoked_component": "Deprecated",
                "annotations": [["Deprecated", {}]],
            },
            {"kind": "declaration", "invoked_component": "int"},
        ]
    )

    assert isinstance(component.invocations[0], AnnotationInvocation)
    assert component.invocations[0].annotations == [("Deprecated", {})]
    assert isinstance(component.invocations[1], TypeDeclaration)
