"""Receiver and parameter type references."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from refdocs.sid import Sid


class TypeKind(Enum):
    GENERIC = "generic"
    NULLABLE = "nullable"
    DEFINITELY_NON_NULL = "definitely_non_null"
    PRIMITIVE = "primitive"
    VOID = "void"
    JAVA_OBJECT = "java_object"
    TYPE_ALIAS = "type_alias"
    FUNCTIONAL = "functional"
    TYPE_PARAMETER = "type_parameter"
    DYNAMIC = "dynamic"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class TypeRef:
    """A type as written at a use site.

    Wrapping kinds (nullable, definitely-non-null) carry ``inner``;
    generic constructors and aliases carry the SID they point at.
    """

    kind: TypeKind
    name: str = ""
    sid: Sid | None = None
    inner: TypeRef | None = None

    def display_name(self) -> str:
        if self.inner is not None:
            suffix = "?" if self.kind is TypeKind.NULLABLE else ""
            return self.inner.display_name() + suffix
        if self.name:
            return self.name
        if self.sid is not None:
            return self.sid.class_names or self.sid.package
        return self.kind.value
