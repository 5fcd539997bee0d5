"""Utility for flattening a documentable's structural descendants."""

from refdocs.documentable import Documentable


def exploded_children(d: Documentable, *, with_accessors: bool = False) -> list[Documentable]:
    """Return all descendants of ``d`` in pre-order, excluding ``d`` itself."""
    result: list[Documentable] = []
    for child in d.children:
        result.append(child)
        if with_accessors:
            result.extend(child.accessors)
        result.extend(exploded_children(child, with_accessors=with_accessors))
    return result
