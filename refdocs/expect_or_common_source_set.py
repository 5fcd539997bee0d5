"""Utility for choosing a documentable's canonical source set."""

from refdocs.documentable import Documentable
from refdocs.errors import InternalConsistencyError
from refdocs.source_set import SourceSet

COMMON_NAMES = ("common", "commonMain")
PLATFORM_FALLBACKS = ("jvmMain", "androidMain", "desktopMain")


def expect_or_common_source_set(d: Documentable) -> SourceSet:
    """Pick the source set whose facts are authoritative for ``d``."""
    source_sets = d.source_sets
    if len(source_sets) == 1:
        return source_sets[0]
    if d.expect_present_in is not None:
        return d.expect_present_in

    common = [s for s in source_sets if s.platform == "common"]
    if len(common) == 1:
        return common[0]

    by_name = {s.name: s for s in source_sets}
    for name in (*COMMON_NAMES, *PLATFORM_FALLBACKS):
        if name in by_name:
            return by_name[name]
    if source_sets:
        return source_sets[0]
    msg = f"{d.sid} has no source sets"
    raise InternalConsistencyError(msg)


def as_java_source_set(d: Documentable) -> SourceSet:
    """Source set whose JVM view applies to ``d`` (first jvm platform set)."""
    for s in d.source_sets:
        if s.platform == "jvm":
            return s
    return expect_or_common_source_set(d)
