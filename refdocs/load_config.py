"""Logic for loading and merging configuration files."""

from pathlib import Path
from typing import Any

import yaml

from refdocs.deep_merge import deep_merge
from refdocs.propagate_annotations import DEFAULT_PROPAGATING_ANNOTATIONS

DEFAULT_CONFIG: dict[str, Any] = {
    "doc_root_path": "reference",
    "java_docs_path": None,
    "kotlin_docs_path": "kotlin",
    "project_path": "",
    "excluded_packages": [],
    "excluded_packages_for_java": [],
    "excluded_packages_for_kotlin": [],
    "hiding_annotations": [],
    "propagating_annotations": list(DEFAULT_PROPAGATING_ANNOTATIONS),
    "include_hidden_parent_symbols": False,
    "package_prefix_to_remove_in_toc": None,
    "base_source_link": None,
    "included_head_tags_path_java": None,
    "included_head_tags_path_kotlin": None,
    "external_docs": [],
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
