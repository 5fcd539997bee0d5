"""Memoised resolution of symbols documented by other doc sets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from refdocs.join_paths import join_paths
from refdocs.member_anchor import member_anchor
from refdocs.path_constants import PACKAGE_SUMMARY
from refdocs.sid import Sid

logger = logging.getLogger(__name__)


class LocationOracle(Protocol):
    def resolve(self, sid: Sid) -> str | None: ...


class ExternalLocationProvider:
    """Caches oracle answers per SID, including "not external"."""

    def __init__(self, oracle: LocationOracle) -> None:
        self.oracle = oracle
        self._cache: dict[Sid, str | None] = {}

    def resolve(self, sid: Sid) -> str | None:
        if sid not in self._cache:
            self._cache[sid] = self.oracle.resolve(sid)
        return self._cache[sid]


class PackageListLocationOracle:
    """Resolves SIDs in packages published by an external doc set."""

    def __init__(self, external_docs: Iterable[Mapping[str, Any]]) -> None:
        self._roots: dict[str, str] = {}
        for doc_set in external_docs:
            url = str(doc_set["url"]).rstrip("/")
            for package in doc_set.get("packages") or []:
                self._roots.setdefault(str(package), url)
        logger.debug("Loaded %d external packages", len(self._roots))

    def resolve(self, sid: Sid) -> str | None:
        root = self._roots.get(sid.package)
        if root is None:
            return None
        package_dir = sid.package.replace(".", "/")
        if not sid.class_names:
            return f"{root}/{join_paths(package_dir, PACKAGE_SUMMARY + '.html')}"
        url = f"{root}/{join_paths(package_dir, sid.class_names + '.html')}"
        if sid.callable is not None:
            url += "#" + member_anchor(sid)
        return url
