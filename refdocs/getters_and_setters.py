"""Utility for listing the JVM accessors generated for properties."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from refdocs.documentable import Annotation, Documentable
from refdocs.is_hoisted_from_companion import JVM_FIELD, JVM_STATIC


def getters_and_setters(properties: Iterable[Documentable]) -> list[Documentable]:
    """Accessors of properties that are not exposed as plain fields."""
    result = []
    for prop in properties:
        if prop.has_annotation(JVM_FIELD) or prop.has_modifier("const"):
            continue
        for accessor in prop.accessors:
            result.append(_for_java(accessor, prop))
    return result


def _for_java(accessor: Documentable, prop: Documentable) -> Documentable:
    name = jvm_accessor_name(accessor.name)
    sid = accessor.sid
    if sid.callable is not None and sid.callable.name != name:
        sid = replace(sid, callable=replace(sid.callable, name=name))
    annotations = accessor.annotations
    if prop.has_annotation(JVM_STATIC) and not accessor.has_annotation(JVM_STATIC):
        static = Annotation(JVM_STATIC)
        annotations = {
            s: (*accessor.annotations.get(s, ()), static) for s in accessor.source_sets
        }
    return replace(
        accessor,
        sid=sid,
        name=name,
        annotations=annotations,
        receiver=accessor.receiver or prop.receiver,
    )


def jvm_accessor_name(name: str) -> str:
    """Turn compiler accessor names like ``<get-foo>`` into ``getFoo``."""
    for marker, prefix in (("<get-", "get"), ("<set-", "set")):
        if name.startswith(marker) and name.endswith(">"):
            prop = name[len(marker) : -1]
            if prefix == "get" and prop.startswith("is") and prop[2:3].isupper():
                return prop
            return prefix + prop[:1].upper() + prop[1:]
    return name
