"""Sort keys giving documentables a deterministic order."""

from refdocs.documentable import Documentable


def simple_sort_key(d: Documentable) -> tuple[str, str, tuple[str, ...]]:
    return (d.sid.full_name, str(d.sid), tuple(s.name for s in d.source_sets))


def function_signature_sort_key(d: Documentable) -> tuple[str, int, str, tuple[str, ...]]:
    signature = ",".join(p.type.display_name() for p in d.parameters)
    return (
        d.name,
        len(d.parameters),
        signature,
        tuple(s.name for s in d.source_sets),
    )
