"""Lookup of class-likes that are not part of the displayed set."""

from __future__ import annotations

from collections.abc import Iterable

from refdocs.documentable import Documentable, Module
from refdocs.sid import Sid
from refdocs.source_set import SourceSet


class ExternalClasslikeProvider:
    """Resolves a SID to a class-like declared outside the rendered packages.

    Typically indexed from the unfiltered analyzer output (so hidden
    declarations can still be walked through) plus library class-likes
    shipped with the dump.
    """

    def __init__(
        self, modules: Iterable[Module] = (), extra: Iterable[Documentable] = ()
    ) -> None:
        self._index: dict[tuple[Sid, str | None], Documentable] = {}
        for module in modules:
            for package in module.packages:
                self._add_all(package.classlikes)
        self._add_all(extra)

    def _add_all(self, classlikes: Iterable[Documentable]) -> None:
        for classlike in classlikes:
            for source_set in classlike.source_sets:
                self._index.setdefault((classlike.sid, source_set.name), classlike)
            self._index.setdefault((classlike.sid, None), classlike)
            self._add_all(classlike.classlikes)

    def get_classlike(self, sid: Sid, source_set: SourceSet | None) -> Documentable | None:
        name = source_set.name if source_set is not None else None
        return self._index.get((sid, name)) or self._index.get((sid, None))

    def __len__(self) -> int:
        return len({sid for sid, _ in self._index})
