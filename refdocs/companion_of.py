"""Utility for finding a class-like's companion object."""

from refdocs.documentable import Documentable, Kind
from refdocs.sid import Sid


def companion_of(classlike: Documentable) -> Documentable | None:
    if classlike.companion_name is None:
        return None
    matches = [
        c
        for c in classlike.classlikes
        if c.kind is Kind.OBJECT and c.name == classlike.companion_name
    ]
    return matches[0] if len(matches) == 1 else None


def is_companion_sid(sid: Sid, documentables: dict[Sid, Documentable]) -> bool:
    """Whether ``sid`` names the companion object of its enclosing class-like."""
    parent = documentables.get(sid.parent)
    if parent is None or not parent.is_classlike or parent.sid == sid:
        return False
    companion = companion_of(parent)
    return companion is not None and companion.sid == sid
