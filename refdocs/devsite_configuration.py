"""Validated plugin configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from refdocs.errors import ConfigurationError
from refdocs.language import Language
from refdocs.load_config import DEFAULT_CONFIG


@dataclass(frozen=True)
class DevsiteConfiguration:
    doc_root_path: str = "reference"
    java_docs_path: str | None = None
    kotlin_docs_path: str | None = "kotlin"
    project_path: str = ""
    excluded_packages: tuple[str, ...] = ()
    excluded_packages_for_java: tuple[str, ...] = ()
    excluded_packages_for_kotlin: tuple[str, ...] = ()
    hiding_annotations: tuple[str, ...] = ()
    propagating_annotations: tuple[str, ...] = ()
    include_hidden_parent_symbols: bool = False
    package_prefix_to_remove_in_toc: str | None = None
    base_source_link: str | None = None
    included_head_tags_path_java: str | None = None
    included_head_tags_path_kotlin: str | None = None
    external_docs: tuple[dict[str, Any], ...] = field(default=())

    def __post_init__(self) -> None:
        if self.java_docs_path is None and self.kotlin_docs_path is None:
            msg = "At least one of java_docs_path and kotlin_docs_path must be set"
            raise ConfigurationError(msg)
        if self.java_docs_path == self.kotlin_docs_path:
            msg = (
                "java_docs_path and kotlin_docs_path must differ, both are "
                f"{self.java_docs_path!r}"
            )
            raise ConfigurationError(msg)
        patterns = (
            *self.excluded_packages,
            *self.excluded_packages_for_java,
            *self.excluded_packages_for_kotlin,
        )
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                msg = f"Invalid excluded package pattern {pattern!r}: {e}"
                raise ConfigurationError(msg) from e

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> DevsiteConfiguration:
        """Build from a ``load_config`` dict; unknown keys are rejected."""
        unknown = sorted(set(config) - set(DEFAULT_CONFIG))
        if unknown:
            msg = f"Unknown configuration keys: {', '.join(unknown)}"
            raise ConfigurationError(msg)
        merged = {**DEFAULT_CONFIG, **config}
        for doc_set in merged["external_docs"] or []:
            if not isinstance(doc_set, dict) or "url" not in doc_set:
                msg = f"external_docs entries need a url: {doc_set!r}"
                raise ConfigurationError(msg)
        return cls(
            doc_root_path=merged["doc_root_path"] or "",
            java_docs_path=merged["java_docs_path"],
            kotlin_docs_path=merged["kotlin_docs_path"],
            project_path=merged["project_path"] or "",
            excluded_packages=tuple(merged["excluded_packages"] or ()),
            excluded_packages_for_java=tuple(merged["excluded_packages_for_java"] or ()),
            excluded_packages_for_kotlin=tuple(merged["excluded_packages_for_kotlin"] or ()),
            hiding_annotations=tuple(merged["hiding_annotations"] or ()),
            propagating_annotations=tuple(merged["propagating_annotations"] or ()),
            include_hidden_parent_symbols=bool(merged["include_hidden_parent_symbols"]),
            package_prefix_to_remove_in_toc=merged["package_prefix_to_remove_in_toc"],
            base_source_link=merged["base_source_link"],
            included_head_tags_path_java=merged["included_head_tags_path_java"],
            included_head_tags_path_kotlin=merged["included_head_tags_path_kotlin"],
            external_docs=tuple(merged["external_docs"] or ()),
        )

    def docs_path_for(self, language: Language) -> str | None:
        if language is Language.JAVA:
            return self.java_docs_path
        return self.kotlin_docs_path

    def excluded_packages_for(self, language: Language) -> tuple[str, ...]:
        if language is Language.JAVA:
            return self.excluded_packages + self.excluded_packages_for_java
        return self.excluded_packages + self.excluded_packages_for_kotlin

    def included_head_tags_path_for(self, language: Language) -> str | None:
        if language is Language.JAVA:
            return self.included_head_tags_path_java
        return self.included_head_tags_path_kotlin

    def languages(self) -> list[Language]:
        """Views to render, in a stable order."""
        return [lang for lang in Language if self.docs_path_for(lang) is not None]
