"""Logic for assembling the data of a class-like page."""

from __future__ import annotations

from typing import Any

from refdocs.build_package_summary import link_entry
from refdocs.class_graph import ClassGraph, is_hidden_in_hierarchy
from refdocs.companion_of import companion_of
from refdocs.documentable import Documentable, Kind
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.expect_or_common_source_set import expect_or_common_source_set
from refdocs.file_path_provider import FilePathProvider
from refdocs.getters_and_setters import getters_and_setters
from refdocs.is_hoisted_from_companion import JVM_FIELD, is_hoisted_from_companion
from refdocs.language import Language
from refdocs.member_anchor import member_anchor
from refdocs.sid import Sid
from refdocs.summary_text import summary_text


async def build_classlike_detail(
    holder: DocumentablesHolder,
    provider: FilePathProvider,
    classlike: Documentable,
    *,
    include_hidden_parent_symbols: bool = False,
    base_source_link: str | None = None,
) -> dict[str, Any]:
    """Return the page data for ``classlike`` in the holder's language."""
    language = holder.display_language
    graph = await holder.class_graph()
    node = graph.get(classlike.sid)
    source_set = expect_or_common_source_set(classlike)

    data: dict[str, Any] = {
        "name": classlike.sid.class_names,
        "kind": classlike.kind.value,
        "package": classlike.sid.package,
        "url": provider.for_reference(classlike.sid).url,
        "visibility": classlike.visibility.get(source_set, "public"),
        "modifiers": sorted(classlike.modifiers.get(source_set, ())),
        "summary": summary_text(classlike),
    }
    if node is not None:
        data["hierarchy"] = [
            *(_link(provider, graph, sid) for sid in node.super_classes),
            {"name": classlike.sid.class_names, "url": data["url"]},
        ]
        data["supertypes"] = [
            _link(provider, graph, sid)
            for sid in (*node.direct_super_classes, *node.direct_interfaces)
        ]
        data["direct_subclasses"] = [
            _link(provider, graph, s) for s in node.direct_sub_classes
        ]
        data["indirect_subclasses"] = [
            _link(provider, graph, s) for s in node.indirect_sub_classes
        ]

    nested = await holder.nested_classlikes_of(classlike)
    data["nested_types"] = [link_entry(provider, d) for d in nested]

    functions, properties = _members(classlike, language)
    data["constructors"] = [_member(provider, c) for c in classlike.constructors]
    data["functions"] = [_member(provider, f) for f in functions]
    data["properties"] = [_member(provider, p) for p in properties]
    if classlike.kind is Kind.ENUM:
        data["enum_entries"] = [
            {"name": e.name, "url": provider.for_reference(e.sid).url}
            for e in classlike.entries
        ]
    data["extension_functions"] = [
        _member(provider, f) for f in await holder.extension_functions_of(classlike)
    ]
    data["extension_properties"] = [
        _member(provider, p) for p in await holder.extension_properties_of(classlike)
    ]

    if node is not None:
        data["inherited"] = _inherited(provider, graph, classlike, node.super_classes)
        data["inherited"] += _inherited(provider, graph, classlike, node.interfaces)
    if include_hidden_parent_symbols:
        data["inherited_from_hidden"] = _hidden_parent_members(
            provider, graph, holder, classlike
        )
    if base_source_link and classlike.sources:
        source = classlike.sources.get(source_set) or next(iter(classlike.sources.values()))
        data["source_link"] = base_source_link.format(
            path=source.path, qualified_name=classlike.sid.full_name
        )
    return data


def _link(provider: FilePathProvider, graph: ClassGraph, sid: Sid) -> dict[str, str]:
    d = graph.classlike(sid)
    if d is None:
        return provider.link_for_reference(sid)
    return link_entry(provider, d)


def _member(provider: FilePathProvider, d: Documentable) -> dict[str, str]:
    reference = provider.for_reference(d.sid)
    return {
        "name": d.name,
        "signature": member_anchor(d.sid),
        "url": reference.url,
        "summary": summary_text(d),
    }


def _is_java_field(p: Documentable) -> bool:
    return p.from_java or p.has_annotation(JVM_FIELD) or p.has_modifier("const")


def _members(
    classlike: Documentable, language: Language
) -> tuple[list[Documentable], list[Documentable]]:
    """Functions and properties shown on the page, companion hoisting included."""
    functions = list(classlike.functions)
    properties = list(classlike.properties)
    companion = companion_of(classlike)
    if companion is not None:
        functions += [f for f in companion.functions if is_hoisted_from_companion(f, language)]
        properties += [
            p for p in companion.properties if is_hoisted_from_companion(p, language)
        ]
    if language is Language.JAVA:
        accessors = getters_and_setters(p for p in properties if not _is_java_field(p))
        functions += accessors
        properties = [p for p in properties if _is_java_field(p)]
    return functions, properties


def _signatures(classlike: Documentable) -> set[str]:
    members = (*classlike.functions, *classlike.properties)
    return {m.sid.callable.signature() for m in members if m.sid.callable}


def _inherited(
    provider: FilePathProvider,
    graph: ClassGraph,
    classlike: Documentable,
    ancestors: tuple[Sid, ...],
) -> list[dict[str, Any]]:
    own = _signatures(classlike)
    result = []
    for sid in ancestors:
        ancestor = graph.classlike(sid)
        if ancestor is None:
            continue
        members = [
            _member(provider, m)
            for m in (*ancestor.functions, *ancestor.properties)
            if m.sid.callable is not None and m.sid.callable.signature() not in own
        ]
        if members:
            result.append({"from": _link(provider, graph, sid), "members": members})
    return result


def _hidden_parent_members(
    provider: FilePathProvider,
    graph: ClassGraph,
    holder: DocumentablesHolder,
    classlike: Documentable,
) -> list[dict[str, str]]:
    """Members of hidden ancestors, linked as if declared on ``classlike``."""
    own = _signatures(classlike)
    page = provider.for_reference(classlike.sid).url
    result: list[dict[str, str]] = []
    seen = {classlike.sid}
    pending = [classlike]
    while pending:
        current = pending.pop(0)
        if not current.source_sets:
            continue
        for supertype in current.supertypes.get(expect_or_common_source_set(current), ()):
            ancestor = graph.classlike(supertype.sid)
            if ancestor is None or ancestor.sid in seen:
                continue
            seen.add(ancestor.sid)
            if not is_hidden_in_hierarchy(ancestor, holder.visibility):
                continue
            pending.append(ancestor)
            for m in (*ancestor.functions, *ancestor.properties):
                if m.sid.callable is None or m.sid.callable.signature() in own:
                    continue
                own.add(m.sid.callable.signature())
                result.append(
                    {
                        "name": m.name,
                        "signature": member_anchor(m.sid),
                        "url": f"{page}#{member_anchor(m.sid)}",
                    }
                )
    return result
