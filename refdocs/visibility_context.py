"""Hidden-symbol bookkeeping produced by the filter phase."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from refdocs.documentable import Documentable
from refdocs.exploded_children import exploded_children
from refdocs.sid import Sid

logger = logging.getLogger(__name__)


class VisibilityContextBuilder:
    """Accumulates hidden SIDs and package names while filters run."""

    def __init__(self) -> None:
        self._hidden: set[Sid] = set()
        self._hidden_packages: set[str] = set()
        self._frozen = False

    def add_hidden(self, d: Documentable) -> None:
        """Record ``d`` and every structural descendant as hidden."""
        self._check_open()
        self._hidden.add(d.sid)
        for child in exploded_children(d, with_accessors=True):
            self._hidden.add(child.sid)
        for accessor in d.accessors:
            self._hidden.add(accessor.sid)

    def add_hidden_package(self, name: str) -> None:
        self._check_open()
        self._hidden_packages.add(name)

    @property
    def hidden_packages(self) -> frozenset[str]:
        return frozenset(self._hidden_packages)

    def freeze(self) -> VisibilityContext:
        self._frozen = True
        logger.debug(
            "Filter phase hid %d symbols and %d packages",
            len(self._hidden),
            len(self._hidden_packages),
        )
        return VisibilityContext(frozenset(self._hidden), frozenset(self._hidden_packages))

    def _check_open(self) -> None:
        if self._frozen:
            msg = "visibility context is already frozen"
            raise RuntimeError(msg)


@dataclass(frozen=True)
class VisibilityContext:
    """Read-only view of what the filter phase hid."""

    hidden: frozenset[Sid] = frozenset()
    hidden_packages: frozenset[str] = frozenset()

    def has_been_hidden(self, sid: Sid) -> bool:
        return sid in self.hidden

    def package_should_be_hidden(self, name: str) -> bool:
        return any(name == p or name.startswith(p + ".") for p in self.hidden_packages)
