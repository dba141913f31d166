"""Language-agnostic source model: components, invocations and references."""

from model.components import ANONYMOUS_NAME, Component, ComponentKind
from model.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from model.errors import (
    MalformedInputError,
    NameCollisionError,
    ScopeUnderflowError,
    SourceModelError,
    UnsupportedLanguageError,
)
from model.invocations import (
    AnnotationInvocation,
    ComponentInvocation,
    EmptyInvocation,
    ThrownException,
    TypeDeclaration,
    TypeExtension,
    TypeImplementation,
    TypeParameterBinding,
    parse_invocation,
)
from model.references import TypeReference
from model.source_model import SourceModel

__all__ = [
    "ANONYMOUS_NAME",
    "AnnotationInvocation",
    "Component",
    "ComponentInvocation",
    "ComponentKind",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "EmptyInvocation",
    "MalformedInputError",
    "NameCollisionError",
    "ScopeUnderflowError",
    "SourceModel",
    "SourceModelError",
    "ThrownException",
    "TypeDeclaration",
    "TypeExtension",
    "TypeImplementation",
    "TypeParameterBinding",
    "TypeReference",
    "UnsupportedLanguageError",
    "parse_invocation",
]
