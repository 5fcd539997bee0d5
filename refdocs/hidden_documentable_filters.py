"""Filters removing hidden symbols before and after module merging."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from refdocs.doc_node import has_custom_tag
from refdocs.documentable import Documentable, Kind, Module
from refdocs.expect_or_common_source_set import expect_or_common_source_set
from refdocs.visibility_context import VisibilityContextBuilder

logger = logging.getLogger(__name__)

HIDING_TAGS = frozenset({"hide", "removed"})
DEPRECATED = "kotlin.Deprecated"
HIDDEN_LEVEL = "DeprecationLevel.HIDDEN"


def is_hidden_with_annotation(d: Documentable, hiding_annotations: frozenset[str]) -> bool:
    for annotation in d.all_annotations():
        if annotation.fq_name in hiding_annotations:
            return True
        if annotation.fq_name == DEPRECATED and HIDDEN_LEVEL in (
            annotation.param("level") or ""
        ):
            return True
    return False


def is_hidden(d: Documentable, hiding_annotations: frozenset[str]) -> bool:
    """Whether ``d`` itself asks to be left out of the reference docs."""
    if is_hidden_with_annotation(d, hiding_annotations):
        return True
    if any(has_custom_tag(doc, HIDING_TAGS) for doc in d.documentation.values()):
        return True
    return (
        d.kind is Kind.PROPERTY
        and d.getter is not None
        and is_hidden_with_annotation(d.getter, hiding_annotations)
    )


def should_be_suppressed(d: Documentable, hiding_annotations: frozenset[str]) -> bool:
    if is_hidden(d, hiding_annotations):
        return True
    # A Java field is suppressed together with its hidden getter.
    return (
        d.kind is Kind.PROPERTY
        and d.from_java
        and d.getter is not None
        and is_hidden(d.getter, hiding_annotations)
    )


def record_private_annotations(
    modules: Iterable[Module], builder: VisibilityContextBuilder
) -> None:
    """Mark annotation classes with an undocumented visibility as hidden."""
    for module in modules:
        for package in module.packages:
            _record_private_annotations(package.classlikes, builder)


def _record_private_annotations(
    classlikes: Iterable[Documentable], builder: VisibilityContextBuilder
) -> None:
    for classlike in classlikes:
        if classlike.kind is Kind.ANNOTATION:
            source_set = expect_or_common_source_set(classlike)
            visibility = classlike.visibility.get(source_set, "public") or "package"
            if visibility not in source_set.documented_visibilities:
                logger.debug("Recording private annotation %s", classlike.sid)
                builder.add_hidden(classlike)
        _record_private_annotations(classlike.classlikes, builder)


def filter_hidden_pre_merge(
    modules: Iterable[Module],
    hiding_annotations: Iterable[str],
    builder: VisibilityContextBuilder,
) -> list[Module]:
    """Drop hidden documentables from every module, recording what was dropped."""
    hiding = frozenset(hiding_annotations)
    result = []
    for module in modules:
        packages = _keep(module.packages, hiding, builder)
        result.append(replace(module, packages=packages))
    return result


def _keep(
    documentables: Iterable[Documentable],
    hiding: frozenset[str],
    builder: VisibilityContextBuilder,
) -> tuple[Documentable, ...]:
    kept = (_filter(d, hiding, builder) for d in documentables)
    return tuple(d for d in kept if d is not None)


def _filter(
    d: Documentable, hiding: frozenset[str], builder: VisibilityContextBuilder
) -> Documentable | None:
    if should_be_suppressed(d, hiding):
        logger.debug("Hiding %s", d.sid)
        builder.add_hidden(d)
        if d.kind is Kind.PACKAGE:
            builder.add_hidden_package(d.name)
        return None
    return replace(
        d,
        classlikes=_keep(d.classlikes, hiding, builder),
        functions=_keep(d.functions, hiding, builder),
        properties=_keep(d.properties, hiding, builder),
        constructors=_keep(d.constructors, hiding, builder),
        entries=_keep(d.entries, hiding, builder),
        typealiases=_keep(d.typealiases, hiding, builder),
        getter=_filter(d.getter, hiding, builder) if d.getter else None,
        setter=_filter(d.setter, hiding, builder) if d.setter else None,
    )


def filter_hidden_packages_post_merge(
    module: Module, builder: VisibilityContextBuilder
) -> Module:
    """Drop merged packages that were hidden in any pipeline, with their sub-packages."""
    hidden = builder.hidden_packages
    kept = []
    for package in module.packages:
        if any(package.name == h or package.name.startswith(h + ".") for h in hidden):
            logger.debug("Dropping hidden package %s", package.name)
            builder.add_hidden(package)
            continue
        kept.append(package)
    return replace(module, packages=tuple(kept))
