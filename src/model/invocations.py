"""Invocation models: why a component refers to another type.

Each invocation is one variant of a closed union discriminated by ``kind``.
Consumers branch on the concrete class (or on ``kind``); there is no way to
build an instance that claims two variants at once.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Invocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    invoked_component: str = ""
    line: int | None = None

    def is_empty(self) -> bool:
        return not self.invoked_component.strip()


class TypeDeclaration(_Invocation):
    """A type used as the declared type of a member or variable."""

    kind: Literal["declaration"] = "declaration"


class TypeExtension(_Invocation):
    """A supertype named in an ``extends`` clause."""

    kind: Literal["extension"] = "extension"


class TypeImplementation(_Invocation):
    """An interface named in an ``implements`` clause."""

    kind: Literal["implementation"] = "implementation"


class ThrownException(_Invocation):
    """An exception type named in a ``throws`` clause."""

    kind: Literal["exception"] = "exception"


class TypeParameterBinding(_Invocation):
    """A type bound as a generic argument or a type-parameter bound."""

    kind: Literal["typeparameter"] = "typeparameter"


class AnnotationInvocation(_Invocation):
    """An annotation usage.

    ``annotations`` holds ``(annotation name, element values)`` pairs. A bare
    marker annotation such as ``@Override`` stores one pair whose mapping is
    empty.
    """

    kind: Literal["annotation"] = "annotation"
    annotations: list[tuple[str, dict[str, str]]] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return super().is_empty() and not self.annotations


class EmptyInvocation(_Invocation):
    """Marker for the absence of an invocation."""

    kind: Literal["empty"] = "empty"


ComponentInvocation = Annotated[
    Union[
        TypeDeclaration,
        TypeExtension,
        TypeImplementation,
        ThrownException,
        TypeParameterBinding,
        AnnotationInvocation,
        EmptyInvocation,
    ],
    Field(discriminator="kind"),
]

_INVOCATION_ADAPTER: TypeAdapter[ComponentInvocation] = TypeAdapter(
    ComponentInvocation
)


def parse_invocation(data: Any) -> ComponentInvocation:
    """Validate a raw mapping into the invocation variant named by its ``kind``."""
    return _INVOCATION_ADAPTER.validate_python(data)


__all__ = [
    "AnnotationInvocation",
    "ComponentInvocation",
    "EmptyInvocation",
    "ThrownException",
    "TypeDeclaration",
    "TypeExtension",
    "TypeImplementation",
    "TypeParameterBinding",
    "parse_invocation",
]
