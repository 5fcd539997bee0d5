"""Logic for merging per-pipeline modules into one symbol model."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from refdocs.documentable import Documentable, Module
from refdocs.errors import InternalConsistencyError
from refdocs.sid import Sid

_FACETS = (
    "visibility",
    "modifiers",
    "annotations",
    "file_annotations",
    "documentation",
    "sources",
    "supertypes",
    "checked_exceptions",
)
_CHILDREN = ("classlikes", "functions", "properties", "constructors", "entries", "typealiases")


def merge_modules(modules: Iterable[Module], name: str | None = None) -> Module:
    """Union the packages of ``modules``; same-SID symbols merge their facets."""
    modules = list(modules)
    packages = merge_all(p for m in modules for p in m.packages)
    source_sets = tuple(dict.fromkeys(s for m in modules for s in m.source_sets))
    return Module(name or "+".join(m.name for m in modules), packages, source_sets)


def merge_all(documentables: Iterable[Documentable]) -> tuple[Documentable, ...]:
    by_sid: dict[Sid, Documentable] = {}
    for d in documentables:
        existing = by_sid.get(d.sid)
        by_sid[d.sid] = d if existing is None else merge_documentables(existing, d)
    return tuple(by_sid.values())


def merge_documentables(a: Documentable, b: Documentable) -> Documentable:
    """Merge two declarations of the same symbol from different source sets."""
    if a.kind is not b.kind:
        msg = f"Cannot merge {a.sid}: {a.kind.value} and {b.kind.value}"
        raise InternalConsistencyError(msg)
    changes: dict = {f: {**getattr(a, f), **getattr(b, f)} for f in _FACETS}
    changes.update({f: merge_all((*getattr(a, f), *getattr(b, f))) for f in _CHILDREN})
    return replace(
        a,
        source_sets=tuple(dict.fromkeys((*a.source_sets, *b.source_sets))),
        expect_present_in=a.expect_present_in or b.expect_present_in,
        from_java=a.from_java or b.from_java,
        is_exception=a.is_exception or b.is_exception,
        companion_name=a.companion_name or b.companion_name,
        parameters=a.parameters or b.parameters,
        receiver=a.receiver or b.receiver,
        return_type=a.return_type or b.return_type,
        getter=_merge_optional(a.getter, b.getter),
        setter=_merge_optional(a.setter, b.setter),
        **changes,
    )


def _merge_optional(a: Documentable | None, b: Documentable | None) -> Documentable | None:
    if a is None or b is None:
        return a or b
    return merge_documentables(a, b)
