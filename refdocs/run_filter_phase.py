"""Orchestration of the hiding filters around the module merge."""

from collections.abc import Iterable

from refdocs.documentable import Module
from refdocs.hidden_documentable_filters import (
    filter_hidden_packages_post_merge,
    filter_hidden_pre_merge,
    record_private_annotations,
)
from refdocs.merge_modules import merge_modules
from refdocs.visibility_context import VisibilityContext, VisibilityContextBuilder


def run_filter_phase(
    modules: Iterable[Module], hiding_annotations: Iterable[str]
) -> tuple[Module, VisibilityContext]:
    """Run recorder, pre-merge filter, merge and post-merge filter in order.

    The returned context is frozen; nothing may hide symbols after this.
    """
    modules = list(modules)
    builder = VisibilityContextBuilder()
    record_private_annotations(modules, builder)
    filtered = filter_hidden_pre_merge(modules, hiding_annotations, builder)
    merged = merge_modules(filtered)
    module = filter_hidden_packages_post_merge(merged, builder)
    return module, builder.freeze()
