"""Logic for loading an analyzer symbol dump into the in-memory model.

The dump is YAML (JSON is accepted too). Per-source-set facets may be given
either as a single value applying to every source set of the symbol, or as a
mapping keyed by source set name::

    visibility: public
    visibility: {commonMain: public, jvmMain: protected}

SIDs are derived from the nesting when a ``sid`` entry is absent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable as Fn
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from refdocs.doc_node import DocNode
from refdocs.documentable import (
    Annotation,
    Documentable,
    Kind,
    Module,
    Parameter,
    Source,
    Supertype,
    SupertypeKind,
)
from refdocs.errors import InternalConsistencyError
from refdocs.sid import Callable, Sid
from refdocs.source_set import DEFAULT_DOCUMENTED_VISIBILITIES, SourceSet
from refdocs.type_ref import TypeKind, TypeRef

logger = logging.getLogger(__name__)

_CHILD_KINDS: dict[str, Kind | None] = {
    "classlikes": None,
    "functions": Kind.FUNCTION,
    "properties": Kind.PROPERTY,
    "constructors": Kind.FUNCTION,
    "entries": Kind.ENUM_ENTRY,
    "typealiases": Kind.TYPE_ALIAS,
}


@dataclass
class SymbolModel:
    """Everything read from one dump."""

    modules: list[Module]
    source_sets: tuple[SourceSet, ...]
    external_classlikes: list[Documentable] = field(default_factory=list)


def load_symbol_model(path: str | Path) -> SymbolModel:
    """Load and parse an analyzer dump file."""
    doc = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    model = parse_symbol_model(doc)
    logger.info(
        "Loaded %d modules and %d external class-likes from %s",
        len(model.modules),
        len(model.external_classlikes),
        path,
    )
    return model


def parse_symbol_model(doc: dict[str, Any]) -> SymbolModel:
    return _Parser(doc.get("sourceSets") or [{"name": "main"}]).parse(doc)


def qualified_sid(qualified_name: str) -> Sid:
    """Split ``com.example.Outer.Inner`` at the first capitalised segment."""
    segments = qualified_name.split(".")
    for i, segment in enumerate(segments):
        if segment[:1].isupper():
            return Sid(".".join(segments[:i]), ".".join(segments[i:]))
    package, _, name = qualified_name.rpartition(".")
    return Sid(package, name or None)


class _Parser:
    def __init__(self, raw_source_sets: list[Any]) -> None:
        self.source_sets: dict[str, SourceSet] = {}
        for raw in raw_source_sets:
            if isinstance(raw, str):
                raw = {"name": raw}
            visibilities = raw.get("documentedVisibilities")
            self.source_sets[raw["name"]] = SourceSet(
                name=raw["name"],
                platform=raw.get("platform", "jvm"),
                documented_visibilities=(
                    frozenset(visibilities)
                    if visibilities is not None
                    else DEFAULT_DOCUMENTED_VISIBILITIES
                ),
            )

    def parse(self, doc: dict[str, Any]) -> SymbolModel:
        modules = []
        for raw_module in doc.get("modules") or []:
            source_sets = self._source_sets(raw_module.get("sourceSets"), self._all())
            packages = tuple(
                self.documentable(p, Sid(), source_sets, Kind.PACKAGE)
                for p in raw_module.get("packages") or []
            )
            modules.append(Module(raw_module.get("name", "module"), packages, source_sets))

        external = [
            self.documentable(raw, Sid(raw.get("package", "")), (), None)
            for raw in doc.get("externalClasslikes") or []
        ]
        return SymbolModel(modules, self._all(), external)

    def _all(self) -> tuple[SourceSet, ...]:
        return tuple(self.source_sets.values())

    def _source_sets(
        self, names: list[str] | None, default: tuple[SourceSet, ...]
    ) -> tuple[SourceSet, ...]:
        if names is None:
            return default
        try:
            return tuple(self.source_sets[n] for n in names)
        except KeyError as e:
            msg = f"Unknown source set {e.args[0]!r}"
            raise InternalConsistencyError(msg) from e

    def documentable(
        self,
        raw: dict[str, Any],
        parent: Sid,
        inherited_source_sets: tuple[SourceSet, ...],
        default_kind: Kind | None,
    ) -> Documentable:
        kind = self._kind(raw, default_kind)
        name = str(raw["name"])
        source_sets = self._source_sets(raw.get("sourceSets"), inherited_source_sets)
        parameters = tuple(
            Parameter(p["name"], self.type_ref(p["type"])) for p in raw.get("parameters") or []
        )
        receiver = self.type_ref(raw["receiver"]) if raw.get("receiver") else None
        sid = self._sid(raw, kind, name, parent, parameters, receiver)

        def facet(key: str, convert: Fn[[Any], Any]) -> dict[SourceSet, Any]:
            return self._facet(raw.get(key), source_sets, convert)

        children: dict[str, tuple[Documentable, ...]] = {}
        for key, child_kind in _CHILD_KINDS.items():
            children[key] = tuple(
                self.documentable(c, sid, source_sets, child_kind)
                for c in raw.get(key) or []
            )

        expect = raw.get("expectPresentIn")
        return Documentable(
            sid=sid,
            name=name,
            kind=kind,
            source_sets=source_sets,
            expect_present_in=self._source_sets([expect], ())[0] if expect else None,
            visibility=facet("visibility", str),
            modifiers=facet("modifiers", lambda v: frozenset(v or ())),
            annotations=facet("annotations", self._annotations),
            file_annotations=facet("fileAnnotations", self._annotations),
            documentation=facet("documentation", self.doc_node),
            sources=facet("source", self._source),
            from_java=bool(raw.get("fromJava", False)),
            supertypes=facet("supertypes", self._supertypes),
            companion_name=raw.get("companion"),
            is_exception=bool(raw.get("isException", False)),
            parameters=parameters,
            receiver=receiver,
            return_type=self.type_ref(raw["returnType"]) if raw.get("returnType") else None,
            getter=self._accessor(raw.get("getter"), sid.parent, source_sets),
            setter=self._accessor(raw.get("setter"), sid.parent, source_sets),
            checked_exceptions=facet(
                "checkedExceptions", lambda v: tuple(qualified_sid(x) for x in v or ())
            ),
            **children,
        )

    def _accessor(
        self, raw: dict[str, Any] | None, owner: Sid, source_sets: tuple[SourceSet, ...]
    ) -> Documentable | None:
        if raw is None:
            return None
        return self.documentable(raw, owner, source_sets, Kind.FUNCTION)

    def _kind(self, raw: dict[str, Any], default: Kind | None) -> Kind:
        value = raw.get("kind")
        if value is None and default is not None:
            return default
        try:
            return Kind(value)
        except ValueError as e:
            msg = f"Unknown documentable kind {value!r} for {raw.get('name')!r}"
            raise InternalConsistencyError(msg) from e

    def _sid(
        self,
        raw: dict[str, Any],
        kind: Kind,
        name: str,
        parent: Sid,
        parameters: tuple[Parameter, ...],
        receiver: TypeRef | None,
    ) -> Sid:
        if "sid" in raw:
            return self.sid(raw["sid"])
        if kind is Kind.PACKAGE:
            return Sid(name)
        if kind in (Kind.FUNCTION, Kind.PROPERTY):
            return Sid(
                parent.package,
                parent.class_names,
                Callable(
                    name,
                    tuple(p.type.display_name() for p in parameters),
                    receiver.display_name() if receiver is not None else None,
                ),
            )
        class_names = f"{parent.class_names}.{name}" if parent.class_names else name
        return Sid(parent.package, class_names)

    def sid(self, raw: Any) -> Sid:
        if isinstance(raw, str):
            return qualified_sid(raw)
        callable_ = raw.get("callable")
        return Sid(
            raw.get("package", ""),
            raw.get("classNames"),
            Callable(
                callable_["name"],
                tuple(callable_.get("params") or ()),
                callable_.get("receiver"),
            )
            if callable_
            else None,
        )

    def _facet(
        self,
        value: Any,
        source_sets: tuple[SourceSet, ...],
        convert: Fn[[Any], Any],
    ) -> dict[SourceSet, Any]:
        if value is None:
            return {}
        if isinstance(value, dict) and value and all(k in self.source_sets for k in value):
            return {self.source_sets[k]: convert(v) for k, v in value.items()}
        return {s: convert(value) for s in source_sets}

    def type_ref(self, raw: Any) -> TypeRef:
        if isinstance(raw, str):
            if raw.endswith("?"):
                return TypeRef(TypeKind.NULLABLE, inner=self.type_ref(raw[:-1]))
            sid = qualified_sid(raw)
            return TypeRef(TypeKind.GENERIC, name=sid.class_names or raw, sid=sid)
        try:
            kind = TypeKind(raw.get("kind", "generic"))
        except ValueError as e:
            msg = f"Unknown type kind {raw.get('kind')!r}"
            raise InternalConsistencyError(msg) from e
        sid = self.sid(raw["sid"]) if raw.get("sid") else None
        return TypeRef(
            kind=kind,
            name=raw.get("name") or (sid.class_names if sid and sid.class_names else ""),
            sid=sid,
            inner=self.type_ref(raw["inner"]) if raw.get("inner") else None,
        )

    def doc_node(self, raw: Any) -> DocNode:
        if isinstance(raw, str):
            return DocNode("root", children=(DocNode("text", text=raw),))
        return DocNode(
            kind=raw.get("kind", "root"),
            name=raw.get("name", ""),
            text=raw.get("text", ""),
            children=tuple(self.doc_node(c) for c in raw.get("children") or []),
        )

    def _annotations(self, raw: list[Any] | None) -> tuple[Annotation, ...]:
        result = []
        for a in raw or []:
            if isinstance(a, str):
                result.append(Annotation(a))
            else:
                params = tuple((str(k), str(v)) for k, v in (a.get("params") or {}).items())
                result.append(Annotation(a["name"], params))
        return tuple(result)

    def _supertypes(self, raw: list[Any] | None) -> tuple[Supertype, ...]:
        result = []
        for s in raw or []:
            if isinstance(s, str):
                result.append(Supertype(qualified_sid(s), SupertypeKind.KOTLIN_CLASS))
            else:
                try:
                    kind = SupertypeKind(s.get("kind", "kotlin_class"))
                except ValueError as e:
                    msg = f"Unknown supertype kind {s.get('kind')!r} for {s.get('type')!r}"
                    raise InternalConsistencyError(msg) from e
                result.append(Supertype(self.sid(s["type"]), kind))
        return tuple(result)

    def _source(self, raw: Any) -> Source:
        if isinstance(raw, str):
            return Source(raw)
        return Source(raw["path"], raw.get("line"))
