"""Logic for pushing designated annotations down the declaration tree."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from refdocs.documentable import Annotation, Documentable, Module
from refdocs.expect_or_common_source_set import expect_or_common_source_set

DEFAULT_PROPAGATING_ANNOTATIONS = ("kotlin.Deprecated", "java.lang.Deprecated")


def propagate_annotations(module: Module, propagating: Iterable[str]) -> Module:
    """Copy propagating annotations from packages and classes to their members.

    Running it twice gives the same result as running it once.
    """
    names = tuple(propagating)
    if not names:
        return module
    packages = tuple(_propagate_package(p, names) for p in module.packages)
    return replace(module, packages=packages)


def propagating_annotations_of(d: Documentable, names: tuple[str, ...]) -> list[Annotation]:
    if not d.source_sets:
        return []
    source_set = expect_or_common_source_set(d)
    return [a for a in d.annotations_for(source_set) if a.fq_name in names]


def _propagate_package(package: Documentable, names: tuple[str, ...]) -> Documentable:
    inherited = propagating_annotations_of(package, names)
    return replace(
        package,
        functions=tuple(_propagate_callable(f, inherited, names) for f in package.functions),
        properties=tuple(_propagate_callable(p, inherited, names) for p in package.properties),
        classlikes=tuple(_propagate_classlike(c, inherited, names) for c in package.classlikes),
    )


def _split(
    d: Documentable, inherited: list[Annotation], names: tuple[str, ...]
) -> tuple[list[Annotation], list[Annotation]]:
    """Return (annotations to add to ``d``, annotations to pass below ``d``)."""
    own = propagating_annotations_of(d, names)
    own_names = {a.fq_name for a in own}
    to_add = [a for a in inherited if a.fq_name not in own_names]
    return to_add, own + to_add


def _with_annotations(d: Documentable, to_add: list[Annotation]) -> Documentable:
    if not to_add:
        return d
    annotations = dict(d.annotations)
    for source_set in d.source_sets:
        annotations[source_set] = (*annotations.get(source_set, ()), *to_add)
    return replace(d, annotations=annotations)


def _propagate_classlike(
    classlike: Documentable, inherited: list[Annotation], names: tuple[str, ...]
) -> Documentable:
    to_add, to_propagate = _split(classlike, inherited, names)
    updated = replace(
        classlike,
        functions=tuple(_propagate_callable(f, to_propagate, names) for f in classlike.functions),
        properties=tuple(
            _propagate_callable(p, to_propagate, names) for p in classlike.properties
        ),
        constructors=tuple(
            _propagate_callable(c, to_propagate, names) for c in classlike.constructors
        ),
        classlikes=tuple(
            _propagate_classlike(c, to_propagate, names) for c in classlike.classlikes
        ),
        # entries take the annotations but their own members do not
        entries=tuple(
            _with_annotations(e, _split(e, to_propagate, names)[0])
            for e in classlike.entries
        ),
    )
    return _with_annotations(updated, to_add)


def _propagate_callable(
    d: Documentable, inherited: list[Annotation], names: tuple[str, ...]
) -> Documentable:
    to_add, to_propagate = _split(d, inherited, names)
    if not to_propagate:
        return d
    updated = replace(
        d,
        getter=_propagate_callable(d.getter, to_propagate, names) if d.getter else None,
        setter=_propagate_callable(d.setter, to_propagate, names) if d.setter else None,
    )
    return _with_annotations(updated, to_add)
