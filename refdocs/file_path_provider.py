"""Logic for computing output paths and cross-reference URLs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from refdocs.companion_of import is_companion_sid
from refdocs.documentable import Documentable, Kind
from refdocs.external_location_provider import ExternalLocationProvider
from refdocs.is_hoisted_from_companion import is_hoisted_from_companion
from refdocs.join_paths import join_paths
from refdocs.language import Language
from refdocs.member_anchor import member_anchor
from refdocs.path_constants import (
    BOOK_FILE,
    CLASSES_FILE,
    INDEX_FILE,
    JVM_ROOT_PACKAGE,
    NON_DOCUMENTABLE_PREFIXES,
    PACKAGE_LIST,
    PACKAGE_SUMMARY,
    PACKAGES_FILE,
    TOC_FILE,
)
from refdocs.sid import Sid


@dataclass(frozen=True)
class ReferencePath:
    """Display name and URL of a link target; ``url`` is empty for unlinkable types."""

    name: str
    url: str


def outer_class_name(class_names: str | None) -> str | None:
    if not class_names or "." not in class_names:
        return None
    return class_names.rpartition(".")[0]


class FilePathProvider:
    """Maps symbols of one language view to paths on the doc site."""

    def __init__(
        self,
        language: Language,
        doc_root_path: str,
        language_path: str,
        project_path: str = "",
        included_head_tags_path: str | None = None,
        location_provider: ExternalLocationProvider | None = None,
        documentables_graph: dict[Sid, Documentable] | None = None,
        is_hoisted: Callable[[Documentable, Language], bool] = is_hoisted_from_companion,
    ) -> None:
        self.language = language
        self.doc_root_path = doc_root_path
        self.language_path = language_path
        self.project_path = project_path
        self.included_head_tags_path = included_head_tags_path
        self.location_provider = location_provider
        self.documentables_graph = documentables_graph or {}
        self.is_hoisted = is_hoisted

        self.root_path = join_paths("/", doc_root_path, language_path)
        self.project_root = join_paths(self.root_path, project_path)
        self.package_list = join_paths(self.project_root, PACKAGE_LIST)
        self.packages = join_paths(self.project_root, PACKAGES_FILE)
        self.classes = join_paths(self.project_root, CLASSES_FILE)
        self.root_index = join_paths(self.project_root, INDEX_FILE + ".html")
        self.toc = join_paths(self.project_root, TOC_FILE)
        self.book = join_paths(self.project_root, BOOK_FILE)

    def for_type(self, package_name: str, type_name: str) -> str:
        """Page path of a type (or ``package-summary``) in ``package_name``."""
        return join_paths(
            self.root_path, package_name.replace(".", "/"), f"{type_name}.html"
        )

    def for_package(self, package_name: str) -> str:
        return self.for_type(package_name, PACKAGE_SUMMARY)

    def for_reference(self, sid: Sid) -> ReferencePath:
        """Resolve ``sid`` to a display name and URL.

        External symbols go to their doc set; enum entries and hoisted
        companion members link into the enclosing type's page.
        """
        documentable = self.documentables_graph.get(sid)
        package_name = sid.package or JVM_ROOT_PACKAGE
        class_name = sid.class_names
        symbol = sid.callable
        type_name = class_name or package_name

        full_name = f"{package_name}.{class_name}"
        if any(full_name.startswith(p) for p in NON_DOCUMENTABLE_PREFIXES):
            return ReferencePath(type_name, "")

        if self.location_provider is not None:
            external = self.location_provider.resolve(sid)
            if external is not None:
                name = symbol.name if symbol is not None else type_name
                return ReferencePath(name, external)

        if class_name is None:
            package_url = self.for_package(package_name)
            if symbol is None:
                return ReferencePath(package_name, package_url)
            # top-level and extension members are listed on the package summary
            return ReferencePath(symbol.name, package_url + "#" + member_anchor(sid))

        outer = outer_class_name(class_name)
        if (
            documentable is not None
            and documentable.kind is Kind.ENUM_ENTRY
            and outer is not None
        ):
            url = self.for_type(package_name, outer) + "#" + documentable.name
            return ReferencePath(type_name, url)

        type_url = self.for_type(package_name, class_name)
        if symbol is None:
            return ReferencePath(type_name, type_url)

        if (
            outer is not None
            and documentable is not None
            and is_companion_sid(sid.parent, self.documentables_graph)
            and self.is_hoisted(documentable, self.language)
        ):
            url = self.for_type(package_name, outer) + "#" + member_anchor(sid)
            return ReferencePath(symbol.name, url)

        return ReferencePath(symbol.name, type_url + "#" + member_anchor(sid))

    def link_for_reference(
        self, sid: Sid, name: str | None = None, suffix: str = ""
    ) -> dict[str, str]:
        """Link record (``name``, ``url``) for templates."""
        reference = self.for_reference(sid)
        return {"name": (name or reference.name) + suffix, "url": reference.url}
