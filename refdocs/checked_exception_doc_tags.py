"""Adds ``throws`` documentation for checked exceptions nobody documented."""

from __future__ import annotations

from dataclasses import replace

from refdocs.doc_node import DocNode
from refdocs.documentable import Documentable, Module

THROWS = "throws"


def add_checked_exception_doc_tags(module: Module) -> Module:
    packages = tuple(_transform(p) for p in module.packages)
    return replace(module, packages=packages)


def _transform(d: Documentable) -> Documentable:
    return replace(
        d,
        classlikes=tuple(_transform(c) for c in d.classlikes),
        functions=tuple(_with_throws_tags(f) for f in d.functions),
        constructors=tuple(_with_throws_tags(c) for c in d.constructors),
    )


def documented_exceptions(doc: DocNode) -> set[str]:
    """Names (first word) of the exceptions already covered by ``throws`` tags."""
    return {
        c.text.split()[0]
        for c in doc.children
        if c.kind == "tag" and c.name == THROWS and c.text.strip()
    }


def _with_throws_tags(function: Documentable) -> Documentable:
    if not any(function.checked_exceptions.values()):
        return function
    documentation = dict(function.documentation)
    for source_set, exceptions in function.checked_exceptions.items():
        doc = documentation.get(source_set, DocNode())
        documented = documented_exceptions(doc)
        for exception in exceptions:
            if exception.full_name in documented or exception.class_names in documented:
                continue
            doc = doc.with_child(DocNode("tag", THROWS, exception.full_name))
        documentation[source_set] = doc
    return replace(function, documentation=documentation)
