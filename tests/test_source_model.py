from __future__ import annotations

import pytest

from model.components import Component, ComponentKind
from model.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from model.errors import NameCollisionError
from model.source_model import SourceModel


def _component(
    name: str,
    kind: ComponentKind = ComponentKind.CLASS,
    *,
    path: str = "A.java",
    line: int = 1,
) -> Component:
    component = Component(
        kind=kind,
        short_name=name.rpartition(".")[2],
        source_file=path,
        start_line=line,
    )
    component.finalize_name(name)
    return component


def test_insert_requires_finalized_component() -> None:
    model = SourceModel()

    with pytest.raises(ValueError, match="finalized"):
        model.insert(Component(kind=ComponentKind.CLASS, short_name="Foo"))


def test_insert_and_lookup() -> None:
    model = SourceModel()
    foo = _component("pkg.Foo")

    model.insert(foo)

    assert model["pkg.Foo"] is foo
    assert model.get("pkg.Foo") is foo
    assert model.get("pkg.Bar") is None
    assert "pkg.Foo" in model
    assert len(model) == 1
    assert dict(model.components) == {"pkg.Foo": foo}


def test_components_view_is_read_only() -> None:
    model = SourceModel()
    model.insert(_component("pkg.Foo"))

    with pytest.raises(TypeError):
        model.components["pkg.Bar"] = _component("pkg.Bar")  # type: ignore[index]


def test_same_file_collision_is_a_warning_and_last_write_wins() -> None:
    model = SourceModel()
    first = _component("pkg.Foo.f", ComponentKind.METHOD, line=3)
    second = _component("pkg.Foo.f", ComponentKind.METHOD, line=7)

    model.insert(first)
    model.insert(second)

    assert model["pkg.Foo.f"] is second
    assert model.diagnostics.ok
    [warning] = model.diagnostics.warnings
    assert warning.kind == DiagnosticKind.NAME_COLLISION
    assert warning.names == ("A.java:3", "A.java:7")


def test_cross_file_collision_is_an_error() -> None:
    model = SourceModel()

    model.insert(_component("pkg.Foo", path="A.java"))
    model.insert(_component("pkg.Foo", path="B.java"))

    assert model["pkg.Foo"].source_file == "B.java"
    [error] = model.diagnostics.errors
    assert error.kind == DiagnosticKind.NAME_COLLISION
    assert error.path == "B.java"


def test_error_policy_raises_on_insert() -> None:
    model = SourceModel(collision_policy="error")
    model.insert(_component("pkg.Foo"))

    with pytest.raises(NameCollisionError) as excinfo:
        model.insert(_component("pkg.Foo", path="B.java"))

    assert excinfo.value.name == "pkg.Foo"
    assert excinfo.value.path == "B.java"
    assert model["pkg.Foo"].source_file == "A.java"


def test_packages_merge_children_instead_of_colliding() -> None:
    model = SourceModel()
    first = _component("pkg", ComponentKind.PACKAGE, path="A.java")
    second = _component("pkg", ComponentKind.PACKAGE, path="B.java")
    foo = _component("pkg.Foo", path="A.java")
    bar = _component("pkg.Bar", path="B.java")
    first.add_child(foo, "pkg")
    second.add_child(bar, "pkg")

    for component in (foo, first, bar, second):
        model.insert(component)

    assert model["pkg"] is first
    assert first.children == [foo, bar]
    assert not model.diagnostics.of_kind(DiagnosticKind.NAME_COLLISION)


def test_merge_under_error_policy_keeps_existing_component() -> None:
    model = SourceModel(collision_policy="error")
    original = _component("pkg.Foo", path="A.java")
    model.insert(original)
    other = SourceModel()
    other.insert(_component("pkg.Foo", path="B.java"))
    other.insert(_component("pkg.Bar", path="B.java"))

    model.merge(other)

    assert model["pkg.Foo"] is original
    assert "pkg.Bar" in model
    [error] = model.diagnostics.errors
    assert error.names == ("A.java:1", "B.java:1")


def test_roots_and_kinds() -> None:
    model = SourceModel()
    package = _component("pkg", ComponentKind.PACKAGE)
    foo = _component("pkg.Foo")
    package.add_child(foo, "pkg")
    model.insert(foo)
    model.insert(package)

    assert model.roots() == [package]
    assert model.of_kind(ComponentKind.CLASS) == [foo]
    assert list(model) == ["pkg.Foo", "pkg"]


def test_diagnostics_split_by_severity() -> None:
    diagnostics = Diagnostics()

    diagnostics.record(DiagnosticKind.NAME_COLLISION, "dup", path="A.java", line=3)
    error = diagnostics.record(
        DiagnosticKind.MALFORMED_INPUT, "bad", severity="error", path="B.java"
    )

    assert not diagnostics.ok
    assert diagnostics.errors == [error]
    assert len(diagnostics.warnings) == 1
    assert diagnostics.warnings[0].location() == "A.java:3"
    assert error.location() == "B.java"
    assert error.to_dict() == {
        "kind": "malformed_input",
        "severity": "error",
        "path": "B.java",
        "line": None,
        "names": [],
        "message": "bad",
    }


def test_diagnostics_extend_and_filter() -> None:
    first = Diagnostics()
    second = Diagnostics()
    first.record(DiagnosticKind.NAME_COLLISION, "dup")
    second.record(DiagnosticKind.SCOPE_UNDERFLOW, "empty", severity="error")

    first.extend(second)

    assert [d.kind for d in first.of_kind(DiagnosticKind.SCOPE_UNDERFLOW)] == [
        DiagnosticKind.SCOPE_UNDERFLOW
    ]
    assert Diagnostic(
        kind=DiagnosticKind.NAME_COLLISION, severity="warning", message="dup"
    ).location() == "<model>"


def test_replaced_component_is_detached_from_open_parent() -> None:
    model = SourceModel()
    parent = Component(kind=ComponentKind.CLASS, short_name="Foo")
    first = _component("pkg.Foo.f", ComponentKind.METHOD, line=3)
    second = _component("pkg.Foo.f", ComponentKind.METHOD, line=7)
    parent.add_child(first, "pkg.Foo")
    model.insert(first, parent=parent)
    parent.add_child(second, "pkg.Foo")

    model.insert(second, parent=parent)

    assert parent.children == [second]


def test_replaced_component_is_detached_from_parent_in_model() -> None:
    model = SourceModel()
    old_parent = _component("pkg.Foo")
    first = _component("pkg.Foo.f", ComponentKind.METHOD)
    old_parent.add_child(first, "pkg.Foo")
    model.insert(first)
    model.insert(old_parent)

    model.insert(_component("pkg.Foo.f", ComponentKind.METHOD, line=9))

    assert old_parent.children == []
