"""Utility for joining URL paths with POSIX semantics on any host."""

import posixpath


def join_paths(first: str, *rest: str) -> str:
    """Join path segments with ``/``; empty segments are ignored."""
    parts = [p.replace("\\", "/") for p in (first, *rest) if p]
    if not parts:
        return ""
    return posixpath.normpath(posixpath.join(*parts))
