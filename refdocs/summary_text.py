"""Utility for extracting a one-line summary from documentation."""

from refdocs.doc_node import DocNode
from refdocs.documentable import Documentable
from refdocs.expect_or_common_source_set import expect_or_common_source_set


def summary_text(d: Documentable) -> str:
    """First sentence of the description on the canonical source set."""
    if not d.documentation or not d.source_sets:
        return ""
    doc = d.documentation.get(expect_or_common_source_set(d))
    if doc is None:
        return ""
    text = " ".join(_description(doc).split())
    sentence, dot, _ = text.partition(". ")
    return sentence + "." if dot else text


def _description(node: DocNode) -> str:
    if node.kind in ("tag", "custom_tag"):
        return ""
    parts = [node.text] if node.kind == "text" else []
    parts.extend(_description(c) for c in node.children)
    return " ".join(p for p in parts if p)
