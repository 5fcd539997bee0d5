"""Utility for generating in-page anchors for members."""

from refdocs.sid import Sid


def member_anchor(sid: Sid) -> str:
    """Anchor of a member on its type page: ``name(ParamType1,ParamType2)``."""
    if sid.callable is None:
        return sid.class_names.rpartition(".")[2] if sid.class_names else ""
    return sid.callable.signature()
