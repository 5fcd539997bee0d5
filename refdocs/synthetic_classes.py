"""Logic for the JVM file-facade classes that hold top-level declarations."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from dataclasses import replace

from refdocs.documentable import Documentable, Kind
from refdocs.documentable_sort_keys import function_signature_sort_key
from refdocs.expect_or_common_source_set import as_java_source_set

JVM_NAME = "kotlin.jvm.JvmName"
JVM_SYNTHETIC = "kotlin.jvm.JvmSynthetic"


def name_for_synthetic_class(d: Documentable) -> str:
    """Facade class name: the file's ``@JvmName`` or ``<FileStem>Kt``."""
    source_set = as_java_source_set(d)
    for annotation in d.file_annotations.get(source_set, ()):
        if annotation.fq_name == JVM_NAME and annotation.param("name"):
            return annotation.param("name").strip('"')
    source = d.sources.get(source_set) or next(iter(d.sources.values()), None)
    if source is None:
        return f"{d.sid.package.rpartition('.')[2] or 'Root'}Kt"
    file_name = posixpath.basename(source.path.replace("\\", "/"))
    return file_name.split(".")[0] + "Kt"


def synthetic_classes(package: Documentable) -> list[Documentable]:
    """Group a package's top-level functions and properties into facade classes."""
    groups: dict[str, tuple[list[Documentable], list[Documentable]]] = {}
    for f in _without_jvm_synthetic(package.functions):
        groups.setdefault(name_for_synthetic_class(f), ([], []))[0].append(f)
    for p in _without_jvm_synthetic(package.properties):
        groups.setdefault(name_for_synthetic_class(p), ([], []))[1].append(p)

    result = []
    for name, (functions, properties) in groups.items():
        members = [*functions, *properties]
        source_sets = tuple(dict.fromkeys(s for m in members for s in m.source_sets))
        result.append(
            Documentable(
                sid=package.sid.with_class_names(name),
                name=name,
                kind=Kind.CLASS,
                source_sets=source_sets,
                visibility={s: "public" for s in source_sets},
                modifiers={s: frozenset({"final"}) for s in source_sets},
                sources={s: src for m in members for s, src in m.sources.items()},
                synthetic=True,
                functions=tuple(
                    sorted(
                        (with_java_synthetic(f, name) for f in functions),
                        key=function_signature_sort_key,
                    )
                ),
                properties=tuple(with_java_synthetic(p, name) for p in properties),
            )
        )
    return result


def with_java_synthetic(d: Documentable, class_name: str) -> Documentable:
    """Re-home a top-level member into facade ``class_name`` as a static member."""
    modifiers = {s: d.modifiers.get(s, frozenset()) | {"static"} for s in d.source_sets}
    return replace(
        d,
        sid=d.sid.with_class_names(class_name),
        modifiers=modifiers,
        getter=with_java_synthetic(d.getter, class_name) if d.getter else None,
        setter=with_java_synthetic(d.setter, class_name) if d.setter else None,
    )


def _without_jvm_synthetic(documentables: Iterable[Documentable]) -> list[Documentable]:
    return [d for d in documentables if not d.has_annotation(JVM_SYNTHETIC)]
