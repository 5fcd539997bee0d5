"""Documentation comment trees."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class DocNode:
    """One node of a parsed doc comment.

    ``kind`` is ``root``, ``text``, ``tag`` (built-in block tag such as
    ``throws``) or ``custom_tag`` (``hide``, ``removed``, ...).
    """

    kind: str = "root"
    name: str = ""
    text: str = ""
    children: tuple[DocNode, ...] = ()

    def with_child(self, child: DocNode) -> DocNode:
        return DocNode(self.kind, self.name, self.text, (*self.children, child))


def dfs(node: DocNode) -> Iterator[DocNode]:
    """Yield ``node`` and all of its descendants, depth first."""
    yield node
    for child in node.children:
        yield from dfs(child)


def has_custom_tag(node: DocNode, names: frozenset[str]) -> bool:
    return any(n.kind == "custom_tag" and n.name in names for n in dfs(node))
