"""Logic for building the visible class hierarchy graph."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from refdocs.documentable import (
    Documentable,
    is_class_supertype,
    is_interface_supertype,
)
from refdocs.expect_or_common_source_set import expect_or_common_source_set
from refdocs.external_classlike_provider import ExternalClasslikeProvider
from refdocs.sid import Sid
from refdocs.source_set import SourceSet
from refdocs.visibility_context import VisibilityContext

logger = logging.getLogger(__name__)

VISIBLE_IN_HIERARCHY = frozenset({"public", "protected"})


@dataclass(frozen=True, eq=False)
class ClassNode:
    """Edges of one displayed class-like.

    Sub-class tuples are sorted by class name then package; super-class
    tuples are ordered from the root of the hierarchy downwards.
    """

    classlike: Documentable
    all_sub_classes: tuple[Sid, ...] = ()
    direct_sub_classes: tuple[Sid, ...] = ()
    indirect_sub_classes: tuple[Sid, ...] = ()
    super_classes: tuple[Sid, ...] = ()
    direct_super_classes: tuple[Sid, ...] = ()
    interfaces: tuple[Sid, ...] = ()
    direct_interfaces: tuple[Sid, ...] = ()

    @property
    def sid(self) -> Sid:
        return self.classlike.sid


@dataclass
class _NodeBuilder:
    classlike: Documentable
    all_sub_classes: set[Sid] = field(default_factory=set)
    direct_sub_classes: set[Sid] = field(default_factory=set)
    indirect_sub_classes: set[Sid] = field(default_factory=set)
    super_classes: dict[Sid, None] = field(default_factory=dict)
    direct_super_classes: dict[Sid, None] = field(default_factory=dict)
    interfaces: dict[Sid, None] = field(default_factory=dict)
    direct_interfaces: dict[Sid, None] = field(default_factory=dict)

    def build(self) -> ClassNode:
        def by_name(sids: set[Sid]) -> tuple[Sid, ...]:
            return tuple(sorted(sids, key=lambda s: (s.class_names or "", s.package)))

        return ClassNode(
            classlike=self.classlike,
            all_sub_classes=by_name(self.all_sub_classes),
            direct_sub_classes=by_name(self.direct_sub_classes),
            indirect_sub_classes=by_name(self.indirect_sub_classes),
            super_classes=tuple(self.super_classes),
            direct_super_classes=tuple(self.direct_super_classes),
            interfaces=tuple(self.interfaces),
            direct_interfaces=tuple(self.direct_interfaces),
        )


class ClasslikeLookup:
    """Finds class-likes by SID: displayed ones first, then the external provider.

    External results are memoised per SID, misses included.
    """

    def __init__(
        self,
        local: dict[Sid, Documentable],
        external: ExternalClasslikeProvider | None,
        source_sets: Iterable[SourceSet],
    ) -> None:
        self.local = local
        self.external = external
        self.source_sets = tuple(source_sets)
        self._external_cache: dict[Sid, Documentable | None] = {}

    def __call__(self, sid: Sid) -> Documentable | None:
        found = self.local.get(sid)
        if found is not None:
            return found
        if sid not in self._external_cache:
            self._external_cache[sid] = self._find_external(sid)
        return self._external_cache[sid]

    def _find_external(self, sid: Sid) -> Documentable | None:
        if self.external is None:
            return None
        for source_set in self.source_sets or (None,):
            found = self.external.get_classlike(sid, source_set)
            if found is not None:
                return found
        logger.debug("No declaration found for supertype %s", sid)
        return None


class ClassGraph:
    """Hierarchy graph over the displayed class-likes, keyed by SID."""

    def __init__(self, nodes: dict[Sid, ClassNode], lookup: ClasslikeLookup) -> None:
        self.nodes = nodes
        self.lookup = lookup

    def __getitem__(self, sid: Sid) -> ClassNode:
        return self.nodes[sid]

    def __contains__(self, sid: object) -> bool:
        return sid in self.nodes

    def __iter__(self) -> Iterator[Sid]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, sid: Sid) -> ClassNode | None:
        return self.nodes.get(sid)

    def values(self) -> Iterable[ClassNode]:
        return self.nodes.values()

    def classlike(self, sid: Sid) -> Documentable | None:
        return self.lookup(sid)

    def classlikes(self, sids: Iterable[Sid]) -> list[Documentable]:
        """Resolve ``sids``, dropping any that cannot be found."""
        found = (self.lookup(sid) for sid in sids)
        return [d for d in found if d is not None]


def compute_class_graph(
    classlikes: Iterable[Documentable],
    visibility: VisibilityContext,
    external: ExternalClasslikeProvider | None = None,
    source_sets: Iterable[SourceSet] = (),
) -> ClassGraph:
    """Build the hierarchy graph, walking through hidden supertypes."""
    classlikes = list(classlikes)
    builders = {c.sid: _NodeBuilder(c) for c in classlikes}
    lookup = ClasslikeLookup({c.sid: c for c in classlikes}, external, source_sets)
    for classlike in classlikes:
        _walk(
            classlike,
            builders,
            lookup,
            visibility,
            initial=classlike,
            highest_visible=classlike,
            path=frozenset({classlike.sid}),
        )
    nodes = {sid: b.build() for sid, b in builders.items()}
    logger.debug("Class graph has %d nodes", len(nodes))
    return ClassGraph(nodes, lookup)


def _declared_supertypes(d: Documentable) -> tuple:
    if not d.source_sets:
        return next(iter(d.supertypes.values()), ())
    return d.supertypes.get(expect_or_common_source_set(d), ())


def _visibility_of(d: Documentable) -> str:
    if not d.source_sets:
        return "public"
    return d.visibility.get(expect_or_common_source_set(d), "public") or "package"


def is_hidden_in_hierarchy(d: Documentable, visibility: VisibilityContext) -> bool:
    """Hidden symbols and non-public/protected ones are skipped over in hierarchies."""
    return (
        visibility.has_been_hidden(d.sid)
        or _visibility_of(d) not in VISIBLE_IN_HIERARCHY
    )


def _walk(
    current: Documentable,
    builders: dict[Sid, _NodeBuilder],
    lookup: ClasslikeLookup,
    visibility: VisibilityContext,
    *,
    initial: Documentable,
    highest_visible: Documentable,
    path: frozenset[Sid],
) -> None:
    for supertype in _declared_supertypes(current):
        sid = supertype.sid
        if sid in path:
            logger.warning("Cyclic supertype %s of %s", sid, current.sid)
            continue

        node = builders.get(sid)
        if node is not None:
            node.all_sub_classes.add(initial.sid)
            node.direct_sub_classes.add(highest_visible.sid)
            if highest_visible.sid != initial.sid:
                node.indirect_sub_classes.add(initial.sid)

        found = lookup(sid)
        if found is None:
            continue
        hidden = is_hidden_in_hierarchy(found, visibility)
        _walk(
            found,
            builders,
            lookup,
            visibility,
            initial=initial,
            highest_visible=highest_visible if hidden else found,
            path=path | {sid},
        )
        if hidden:
            continue

        leaf = builders[initial.sid]
        is_direct = initial.sid == highest_visible.sid
        if is_class_supertype(supertype.kind):
            leaf.super_classes[sid] = None
            if is_direct:
                leaf.direct_super_classes[sid] = None
        elif is_interface_supertype(supertype.kind):
            leaf.interfaces[sid] = None
            if is_direct:
                leaf.direct_interfaces[sid] = None


def compute_documentables_graph(graph: ClassGraph) -> dict[Sid, Documentable]:
    """Map every SID reachable from the graph's class-likes to its documentable."""
    result: dict[Sid, Documentable] = {}

    def add(d: Documentable) -> None:
        result[d.sid] = d
        for accessor in d.accessors:
            result[accessor.sid] = accessor
        for child in d.children:
            add(child)

    for node in graph.values():
        add(node.classlike)
    return result
