"""Data models for the merged symbol model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from refdocs.doc_node import DocNode
from refdocs.sid import Sid
from refdocs.source_set import SourceSet
from refdocs.type_ref import TypeRef


class Kind(Enum):
    PACKAGE = "package"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"
    OBJECT = "object"
    FUNCTION = "function"
    PROPERTY = "property"
    ENUM_ENTRY = "enum_entry"
    TYPE_ALIAS = "type_alias"


CLASSLIKE_KINDS = frozenset(
    {Kind.CLASS, Kind.INTERFACE, Kind.ENUM, Kind.ANNOTATION, Kind.OBJECT}
)


class SupertypeKind(Enum):
    JAVA_CLASS = "java_class"
    KOTLIN_CLASS = "kotlin_class"
    JAVA_INTERFACE = "java_interface"
    KOTLIN_INTERFACE = "kotlin_interface"
    JAVA_ENUM = "java_enum"
    KOTLIN_ENUM_CLASS = "kotlin_enum_class"
    JAVA_ANNOTATION = "java_annotation"
    KOTLIN_ANNOTATION_CLASS = "kotlin_annotation_class"
    KOTLIN_OBJECT = "kotlin_object"


def is_class_supertype(kind: SupertypeKind) -> bool:
    return kind in (SupertypeKind.JAVA_CLASS, SupertypeKind.KOTLIN_CLASS)


def is_interface_supertype(kind: SupertypeKind) -> bool:
    return kind in (SupertypeKind.JAVA_INTERFACE, SupertypeKind.KOTLIN_INTERFACE)


@dataclass(frozen=True)
class Annotation:
    """An annotation use; ``params`` keeps declaration order."""

    fq_name: str
    params: tuple[tuple[str, str], ...] = ()

    def param(self, key: str) -> str | None:
        for name, value in self.params:
            if name == key:
                return value
        return None


@dataclass(frozen=True)
class Supertype:
    sid: Sid
    kind: SupertypeKind


@dataclass(frozen=True)
class Source:
    path: str
    line: int | None = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef


@dataclass(eq=False)
class Documentable:
    """A node in the symbol model.

    Per-source-set facets are dicts keyed by ``SourceSet``. Fields that only
    apply to some kinds (``supertypes`` for class-likes, ``receiver`` for
    callables, ...) are left empty elsewhere.
    """

    sid: Sid
    name: str
    kind: Kind
    source_sets: tuple[SourceSet, ...] = ()
    expect_present_in: SourceSet | None = None
    visibility: dict[SourceSet, str] = field(default_factory=dict)
    modifiers: dict[SourceSet, frozenset[str]] = field(default_factory=dict)
    annotations: dict[SourceSet, tuple[Annotation, ...]] = field(default_factory=dict)
    file_annotations: dict[SourceSet, tuple[Annotation, ...]] = field(
        default_factory=dict
    )
    documentation: dict[SourceSet, DocNode] = field(default_factory=dict)
    sources: dict[SourceSet, Source] = field(default_factory=dict)
    from_java: bool = False
    synthetic: bool = False

    # class-likes and packages
    classlikes: tuple[Documentable, ...] = ()
    functions: tuple[Documentable, ...] = ()
    properties: tuple[Documentable, ...] = ()
    constructors: tuple[Documentable, ...] = ()
    entries: tuple[Documentable, ...] = ()
    typealiases: tuple[Documentable, ...] = ()
    supertypes: dict[SourceSet, tuple[Supertype, ...]] = field(default_factory=dict)
    companion_name: str | None = None
    is_exception: bool = False

    # callables
    parameters: tuple[Parameter, ...] = ()
    receiver: TypeRef | None = None
    return_type: TypeRef | None = None
    getter: Documentable | None = None
    setter: Documentable | None = None
    checked_exceptions: dict[SourceSet, tuple[Sid, ...]] = field(
        default_factory=dict
    )

    @property
    def is_classlike(self) -> bool:
        return self.kind in CLASSLIKE_KINDS

    @property
    def children(self) -> tuple[Documentable, ...]:
        """Direct structural children, excluding property accessors."""
        return (
            *self.constructors,
            *self.functions,
            *self.properties,
            *self.classlikes,
            *self.entries,
            *self.typealiases,
        )

    @property
    def accessors(self) -> tuple[Documentable, ...]:
        return tuple(a for a in (self.getter, self.setter) if a is not None)

    def annotations_for(self, source_set: SourceSet) -> tuple[Annotation, ...]:
        return self.annotations.get(source_set, ())

    def all_annotations(self) -> list[Annotation]:
        return [a for anns in self.annotations.values() for a in anns]

    def has_annotation(self, fq_name: str) -> bool:
        return any(a.fq_name == fq_name for a in self.all_annotations())

    def has_modifier(self, modifier: str) -> bool:
        return any(modifier in mods for mods in self.modifiers.values())

    def __repr__(self) -> str:
        return f"Documentable({self.kind.value} {self.sid})"


@dataclass(eq=False)
class Module:
    """One source pipeline's packages, or the merged result of several."""

    name: str
    packages: tuple[Documentable, ...] = ()
    source_sets: tuple[SourceSet, ...] = ()
