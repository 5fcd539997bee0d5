"""Tests for package, class-like and table-of-contents page data."""

import pytest

from refdocs.build_classlike_detail import build_classlike_detail
from refdocs.build_package_summary import build_package_summary
from refdocs.build_toc import build_toc, trim_package_prefix
from refdocs.classify_package import classify_package
from refdocs.documentable import Kind
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.external_classlike_provider import ExternalClasslikeProvider
from refdocs.file_path_provider import FilePathProvider
from refdocs.language import Language
from refdocs.run_filter_phase import run_filter_phase
from refdocs.sid import Sid
from refdocs.visibility_context import VisibilityContext
from tests.factories import (
    PACKAGE,
    class_sid,
    generic,
    hide_doc,
    make_classlike,
    make_enum_entry,
    make_function,
    make_module,
    make_package,
    make_property,
    supertype,
    text_doc,
)

BASE = class_sid("Base")
FOO = class_sid("Foo")
COMPANION = Sid(PACKAGE, "Foo.Companion")
KOTLIN_ROOT = "/reference/kotlin/com/example"


def _hierarchy_package():
    base = make_classlike(
        "Base", functions=[make_function("base", BASE), make_function("run", BASE)]
    )
    companion = make_classlike(
        "Companion",
        outer="Foo",
        kind=Kind.OBJECT,
        functions=[make_function("create", COMPANION)],
    )
    foo = make_classlike(
        "Foo",
        supertypes=[supertype(BASE)],
        source="src/Foo.kt",
        companion_name="Companion",
        functions=[make_function("run", FOO)],
        properties=[make_property("size", FOO, setter=True)],
        classlikes=[companion],
    )
    return make_package(classlikes=[base, foo]), base, foo


async def _setup(package, language, visibility=None, external=None):
    holder = DocumentablesHolder(
        language,
        make_module(package),
        visibility or VisibilityContext(),
        external_classlikes=external,
    )
    await holder.join()
    provider = FilePathProvider(
        language,
        "reference",
        language.value,
        documentables_graph=await holder.documentables_graph(),
    )
    return holder, provider


@pytest.mark.parametrize(
    ("name", "prefix", "expected"),
    [
        ("androidx.paging.compose", "androidx.paging", "compose"),
        ("androidx.paging.compose", "androidx.paging.", "compose"),
        ("androidx.paging", "androidx.paging", "androidx.paging"),
        ("androidx.pagingx", "androidx.paging", "androidx.pagingx"),
        ("androidx.paging", None, "androidx.paging"),
    ],
)
def test_trim_package_prefix(name, prefix, expected) -> None:
    """Verify TOC titles drop the configured prefix only at a segment boundary."""
    assert trim_package_prefix(name, prefix) == expected


@pytest.mark.asyncio
async def test_java_lists_objects_with_classes() -> None:
    """Verify objects join the classes section in the Java view only."""
    package = make_package(
        classlikes=[
            make_classlike("Plain"),
            make_classlike("Registry", kind=Kind.OBJECT),
            make_classlike("Oops", is_exception=True),
        ]
    )
    kotlin, _ = await _setup(package, Language.KOTLIN)
    java, _ = await _setup(package, Language.JAVA)

    kotlin_sections = await classify_package(kotlin, package)
    java_sections = await classify_package(java, package)

    assert [d.name for d in kotlin_sections["classes"]] == ["Plain"]
    assert [d.name for d in kotlin_sections["objects"]] == ["Registry"]
    assert [d.name for d in kotlin_sections["exceptions"]] == ["Oops"]
    assert [d.name for d in java_sections["classes"]] == ["Plain", "Registry"]
    assert java_sections["objects"] == []


@pytest.mark.asyncio
async def test_kotlin_package_summary() -> None:
    """Verify the package page lists classes and top-level members."""
    foo_type = generic("com.example.Foo")
    package = make_package(
        doc=text_doc("Tools for examples. Details follow."),
        classlikes=[make_classlike("Foo", doc=text_doc("A foo."))],
        functions=[
            make_function("greet", Sid(PACKAGE)),
            make_function("shout", Sid(PACKAGE), receiver=foo_type),
        ],
    )
    holder, provider = await _setup(package, Language.KOTLIN)

    summary = await build_package_summary(holder, provider, package)

    assert summary["name"] == PACKAGE
    assert summary["url"] == f"{KOTLIN_ROOT}/package-summary.html"
    assert summary["summary"] == "Tools for examples."
    assert summary["classes"] == [
        {"name": "Foo", "url": f"{KOTLIN_ROOT}/Foo.html", "summary": "A foo."}
    ]
    assert summary["top_level_functions"] == [{"name": "greet", "signature": "greet()"}]
    assert summary["extension_functions"] == [{"name": "shout", "signature": "shout()"}]
    assert "enums" not in summary


@pytest.mark.asyncio
async def test_java_package_summary_uses_facade_classes() -> None:
    """Verify top-level members appear through their facade class in Java."""
    package = make_package(
        functions=[make_function("greet", Sid(PACKAGE), source="src/com/example/Tools.kt")]
    )
    holder, provider = await _setup(package, Language.JAVA)

    summary = await build_package_summary(holder, provider, package)

    assert [c["name"] for c in summary["classes"]] == ["ToolsKt"]
    assert "top_level_functions" not in summary


@pytest.mark.asyncio
async def test_toc_lists_packages_and_sections() -> None:
    """Verify the TOC starts with the indexes and nests sections per package."""
    package = make_package(
        "com.example.widgets",
        classlikes=[
            make_classlike("Button", package="com.example.widgets"),
            make_classlike("Clickable", package="com.example.widgets", kind=Kind.INTERFACE),
        ],
    )
    holder, provider = await _setup(package, Language.KOTLIN)

    toc = (await build_toc(holder, provider, "com.example"))["toc"]

    assert toc[0] == {"title": "Class Index", "path": provider.classes}
    assert toc[1] == {"title": "Package Index", "path": provider.packages}
    entry = toc[2]
    assert entry["title"] == "widgets"
    assert [s["title"] for s in entry["section"]] == ["Interfaces", "Classes"]
    assert entry["section"][1]["section"] == [
        {"title": "Button", "path": "/reference/kotlin/com/example/widgets/Button.html"}
    ]


@pytest.mark.asyncio
async def test_kotlin_classlike_detail() -> None:
    """Verify hierarchy, hoisted members and inherited members in Kotlin."""
    package, _, foo = _hierarchy_package()
    holder, provider = await _setup(package, Language.KOTLIN)

    detail = await build_classlike_detail(
        holder, provider, foo, base_source_link="https://cs.example.org/{path}"
    )

    assert detail["name"] == "Foo"
    assert detail["hierarchy"] == [
        {"name": "Base", "url": f"{KOTLIN_ROOT}/Base.html", "summary": ""},
        {"name": "Foo", "url": f"{KOTLIN_ROOT}/Foo.html"},
    ]
    assert [f["name"] for f in detail["functions"]] == ["run", "create"]
    assert detail["functions"][1]["url"] == f"{KOTLIN_ROOT}/Foo.html#create()"
    assert [p["name"] for p in detail["properties"]] == ["size"]
    assert detail["nested_types"] == []
    inherited = detail["inherited"]
    assert [m["name"] for m in inherited[0]["members"]] == ["base"]
    assert detail["source_link"] == "https://cs.example.org/src/Foo.kt"


@pytest.mark.asyncio
async def test_java_classlike_detail() -> None:
    """Verify Java shows accessors and keeps plain companion members on the companion."""
    package, base, foo = _hierarchy_package()
    holder, provider = await _setup(package, Language.JAVA)

    detail = await build_classlike_detail(holder, provider, foo)
    base_detail = await build_classlike_detail(holder, provider, base)

    assert [f["name"] for f in detail["functions"]] == ["run", "getSize", "setSize"]
    assert detail["properties"] == []
    assert [n["name"] for n in detail["nested_types"]] == ["Foo.Companion"]
    assert [s["name"] for s in base_detail["direct_subclasses"]] == ["Foo"]


@pytest.mark.asyncio
async def test_enum_entries_link_into_enum_page() -> None:
    """Verify enum pages list their entries with anchors."""
    mode_sid = class_sid("Mode")
    mode = make_classlike(
        "Mode", kind=Kind.ENUM, entries=[make_enum_entry("FAST", mode_sid)]
    )
    holder, provider = await _setup(make_package(classlikes=[mode]), Language.KOTLIN)

    detail = await build_classlike_detail(holder, provider, mode)

    assert detail["enum_entries"] == [
        {"name": "FAST", "url": f"{KOTLIN_ROOT}/Mode.html#FAST"}
    ]


@pytest.mark.asyncio
async def test_members_of_hidden_parents_are_listed_on_request() -> None:
    """Verify hidden ancestors' members are surfaced on the visible subclass."""
    hidden_sid = class_sid("HiddenBase")
    hidden = make_classlike(
        "HiddenBase", doc=hide_doc(), functions=[make_function("secret", hidden_sid)]
    )
    public = make_classlike("Public", supertypes=[supertype(hidden_sid)])
    raw = make_module(make_package(classlikes=[hidden, public]))
    module, visibility = run_filter_phase([raw], [])
    (package,) = module.packages
    holder, provider = await _setup(
        package, Language.KOTLIN, visibility, ExternalClasslikeProvider([raw])
    )

    detail = await build_classlike_detail(
        holder, provider, package.classlikes[0], include_hidden_parent_symbols=True
    )

    assert detail["inherited_from_hidden"] == [
        {
            "name": "secret",
            "signature": "secret()",
            "url": f"{KOTLIN_ROOT}/Public.html#secret()",
        }
    ]
