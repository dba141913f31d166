"""Type-name resolution from imports, built-in types and the enclosing package."""

from __future__ import annotations

JAVA_PRIMITIVES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double"}
)

# Types visible without an import. Maps short name -> canonical name.
JAVA_DEFAULT_TYPES: dict[str, str] = {
    **{name: name for name in JAVA_PRIMITIVES},
    **{
        name: f"java.lang.{name}"
        for name in (
            "AbstractMethodError",
            "Appendable",
            "ArithmeticException",
            "ArrayIndexOutOfBoundsException",
            "ArrayStoreException",
            "AssertionError",
            "AutoCloseable",
            "Boolean",
            "Byte",
            "CharSequence",
            "Character",
            "Class",
            "ClassCastException",
            "ClassLoader",
            "ClassNotFoundException",
            "CloneNotSupportedException",
            "Cloneable",
            "Comparable",
            "Deprecated",
            "Double",
            "Enum",
            "Error",
            "Exception",
            "ExceptionInInitializerError",
            "Float",
            "FunctionalInterface",
            "IllegalAccessException",
            "IllegalArgumentException",
            "IllegalMonitorStateException",
            "IllegalStateException",
            "IndexOutOfBoundsException",
            "InstantiationException",
            "Integer",
            "InterruptedException",
            "Iterable",
            "LinkageError",
            "Long",
            "Math",
            "NegativeArraySizeException",
            "NoSuchFieldException",
            "NoSuchMethodException",
            "NullPointerException",
            "Number",
            "NumberFormatException",
            "Object",
            "OutOfMemoryError",
            "Override",
            "Process",
            "Readable",
            "Record",
            "ReflectiveOperationException",
            "Runnable",
            "Runtime",
            "RuntimeException",
            "SafeVarargs",
            "SecurityException",
            "Short",
            "StackOverflowError",
            "StrictMath",
            "String",
            "StringBuffer",
            "StringBuilder",
            "StringIndexOutOfBoundsException",
            "SuppressWarnings",
            "System",
            "Thread",
            "ThreadLocal",
            "Throwable",
            "UnsupportedOperationException",
            "Void",
        )
    },
}


class NameResolver:
    """Resolve short type names with the context accumulated so far in a file.

    Resolution order is fixed: explicit imports shadow built-ins, names that
    already contain a ``.`` are left alone, then built-ins, and finally the
    name is assumed to live in the current package.
    """

    def __init__(self, default_types: dict[str, str] | None = None) -> None:
        self.default_types = (
            default_types if default_types is not None else JAVA_DEFAULT_TYPES
        )
        self.package: str | None = None
        self._imports: list[str] = []
        self._aliases: dict[str, str] = {}

    @property
    def imports(self) -> list[str]:
        return list(self._imports)

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def enter_package(self, package: str) -> None:
        """Start a new compilation unit in ``package``; imports start empty."""
        self.package = package
        self._imports.clear()
        self._aliases.clear()

    def add_import(self, name: str) -> None:
        self._imports.append(name)
        if name.endswith(".*"):
            return
        self._aliases[name.rsplit(".", 1)[-1]] = name

    def package_qualified(self, token: str) -> str:
        if self.package:
            return f"{self.package}.{token}"
        return token

    def resolve(self, token: str, *, suppressed: bool = False) -> str:
        if suppressed:
            return self.package_qualified(token)
        if token in self._aliases:
            return self._aliases[token]
        if "." in token:
            return token
        if token in self.default_types:
            return self.default_types[token]
        return self.package_qualified(token)


__all__ = ["JAVA_DEFAULT_TYPES", "JAVA_PRIMITIVES", "NameResolver"]
