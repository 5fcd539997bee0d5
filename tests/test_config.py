"""Tests for configuration loading, merging and validation."""

from pathlib import Path

import pytest
import yaml

from refdocs.deep_merge import deep_merge
from refdocs.devsite_configuration import DevsiteConfiguration
from refdocs.errors import ConfigurationError
from refdocs.language import Language
from refdocs.load_config import load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"nested": {"x": 1, "y": 2}}
    update = {"nested": {"y": 3, "z": 4}}
    merged = deep_merge(base, update)
    assert merged == {"nested": {"x": 1, "y": 3, "z": 4}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced by default."""
    base = {"excluded_packages": ["a"]}
    update = {"excluded_packages": ["b"]}
    merged = deep_merge(base, update)
    assert merged == {"excluded_packages": ["b"]}


def test_deep_merge_hiding_annotations_additive() -> None:
    """Verify that the hiding annotations list is merged additively."""
    base = {"hiding_annotations": ["A", "B"]}
    update = {"hiding_annotations": ["B", "C"]}
    merged = deep_merge(base, update)
    assert merged["hiding_annotations"] == ["A", "B", "C"]


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config["doc_root_path"] == "reference"
    assert config["kotlin_docs_path"] == "kotlin"
    assert "kotlin.Deprecated" in config["propagating_annotations"]


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "refdocs.yml"
    config_data = {"java_docs_path": "java", "hiding_annotations": ["androidx.RestrictTo"]}
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))

    assert loaded["java_docs_path"] == "java"
    assert loaded["kotlin_docs_path"] == "kotlin"
    assert loaded["hiding_annotations"] == ["androidx.RestrictTo"]


def test_load_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    """Verify that a missing file is not an error."""
    assert load_config(tmp_path / "absent.yml") == load_config(None)


def test_configuration_from_defaults() -> None:
    """Verify the default configuration renders only the Kotlin view."""
    config = DevsiteConfiguration.from_dict(load_config(None))
    assert config.languages() == [Language.KOTLIN]
    assert config.docs_path_for(Language.JAVA) is None


def test_excluded_packages_are_per_language() -> None:
    """Verify shared exclusions combine with each view's own list."""
    config = DevsiteConfiguration.from_dict(
        {
            "java_docs_path": "java",
            "excluded_packages": ["a\\..*"],
            "excluded_packages_for_java": ["b"],
            "excluded_packages_for_kotlin": ["c"],
        }
    )
    assert config.excluded_packages_for(Language.JAVA) == ("a\\..*", "b")
    assert config.excluded_packages_for(Language.KOTLIN) == ("a\\..*", "c")
    assert config.languages() == [Language.JAVA, Language.KOTLIN]


def test_head_tags_path_is_per_language() -> None:
    """Verify the included head tags path is chosen by view."""
    config = DevsiteConfiguration(
        java_docs_path="java",
        included_head_tags_path_java="java/_head.html",
        included_head_tags_path_kotlin="kotlin/_head.html",
    )
    assert config.included_head_tags_path_for(Language.JAVA) == "java/_head.html"
    assert config.included_head_tags_path_for(Language.KOTLIN) == "kotlin/_head.html"


@pytest.mark.parametrize(
    "config",
    [
        {"kotlin_docs_path": None},
        {"java_docs_path": "docs", "kotlin_docs_path": "docs"},
        {"excluded_packages": ["("]},
        {"external_docs": [{"packages": ["android.app"]}]},
        {"unknown_option": True},
    ],
)
def test_invalid_configuration_is_rejected(config) -> None:
    """Verify malformed configurations raise ConfigurationError."""
    with pytest.raises(ConfigurationError):
        DevsiteConfiguration.from_dict(config)
