"""Tests for output paths and cross-reference URLs."""

from unittest.mock import MagicMock

import pytest

from refdocs.documentable import Kind
from refdocs.external_location_provider import (
    ExternalLocationProvider,
    PackageListLocationOracle,
)
from refdocs.file_path_provider import FilePathProvider, ReferencePath, outer_class_name
from refdocs.join_paths import join_paths
from refdocs.language import Language
from refdocs.sid import Callable, Sid
from tests.factories import (
    PACKAGE,
    annotation,
    class_sid,
    generic,
    make_classlike,
    make_enum_entry,
    make_function,
)

FOO = class_sid("Foo")
COMPANION = Sid(PACKAGE, "Foo.Companion")


def _provider(language=Language.KOTLIN, **kwargs) -> FilePathProvider:
    return FilePathProvider(language, "reference", language.value, **kwargs)


def _companion_graph():
    plain = make_function("create", COMPANION)
    static = make_function(
        "of", COMPANION, annotations=[annotation("kotlin.jvm.JvmStatic")]
    )
    companion = make_classlike(
        "Companion", outer="Foo", kind=Kind.OBJECT, functions=[plain, static]
    )
    foo = make_classlike("Foo", companion_name="Companion", classlikes=[companion])
    graph = {d.sid: d for d in (foo, companion, plain, static)}
    return graph, plain, static


def test_root_paths_include_project_path() -> None:
    """Verify the metadata file locations live under the project root."""
    provider = FilePathProvider(
        Language.KOTLIN, "reference", "kotlin", project_path="androidx/paging"
    )

    assert provider.root_path == "/reference/kotlin"
    assert provider.package_list == "/reference/kotlin/androidx/paging/package-list"
    assert provider.packages == "/reference/kotlin/androidx/paging/packages.html"
    assert provider.classes == "/reference/kotlin/androidx/paging/classes.html"
    assert provider.root_index == "/reference/kotlin/androidx/paging/index.html"
    assert provider.toc == "/reference/kotlin/androidx/paging/_toc.yaml"
    assert provider.book == "/reference/kotlin/androidx/paging/_book.yaml"


def test_type_and_package_pages() -> None:
    """Verify type pages follow the package directory layout."""
    provider = _provider(Language.JAVA)

    assert provider.for_type("com.example", "Foo.Bar") == "/reference/java/com/example/Foo.Bar.html"
    assert provider.for_package("com.example") == "/reference/java/com/example/package-summary.html"


def test_package_class_and_member_references() -> None:
    """Verify packages, classes and members resolve to their pages and anchors."""
    provider = _provider()
    run = make_function("run", FOO, params=[generic("com.example.Bar")])

    package = provider.for_reference(Sid(PACKAGE))
    klass = provider.for_reference(FOO)
    member = provider.for_reference(run.sid)

    assert package == ReferencePath(PACKAGE, "/reference/kotlin/com/example/package-summary.html")
    assert klass == ReferencePath("Foo", "/reference/kotlin/com/example/Foo.html")
    assert member == ReferencePath("run", "/reference/kotlin/com/example/Foo.html#run(Bar)")


def test_top_level_members_link_into_package_summary() -> None:
    """Verify top-level and extension members get an anchor on the package page."""
    provider = _provider()
    extension = Sid(PACKAGE, None, Callable("shout", (), "String"))
    top_level = Sid(PACKAGE, None, Callable("greet", ("Int",)))

    assert provider.for_reference(extension) == ReferencePath(
        "shout", "/reference/kotlin/com/example/package-summary.html#shout()"
    )
    assert provider.for_reference(top_level) == ReferencePath(
        "greet", "/reference/kotlin/com/example/package-summary.html#greet(Int)"
    )


def test_enum_entry_links_into_enum_page() -> None:
    """Verify enum entries point at an anchor on their enum's page."""
    entry = make_enum_entry("FAST", class_sid("Mode"))
    provider = _provider(documentables_graph={entry.sid: entry})

    reference = provider.for_reference(entry.sid)

    assert reference.url == "/reference/kotlin/com/example/Mode.html#FAST"


def test_hoisted_companion_member_links_into_outer_page() -> None:
    """Verify hoisting depends on the view and on @JvmStatic."""
    graph, plain, static = _companion_graph()
    kotlin = _provider(Language.KOTLIN, documentables_graph=graph)
    java = _provider(Language.JAVA, documentables_graph=graph)

    assert kotlin.for_reference(plain.sid).url == "/reference/kotlin/com/example/Foo.html#create()"
    assert (
        java.for_reference(plain.sid).url
        == "/reference/java/com/example/Foo.Companion.html#create()"
    )
    assert java.for_reference(static.sid).url == "/reference/java/com/example/Foo.html#of()"


def test_compiler_function_types_are_not_linked() -> None:
    """Verify kotlin.jvm.functions types get a name but no URL."""
    reference = _provider().for_reference(Sid("kotlin.jvm.functions", "Function1"))

    assert reference == ReferencePath("Function1", "")


def test_external_references_are_resolved_once() -> None:
    """Verify the external oracle is consulted once per SID."""
    oracle = MagicMock()
    oracle.resolve.return_value = "https://docs.example.org/Thing.html"
    provider = _provider(location_provider=ExternalLocationProvider(oracle))
    sid = Sid("org.lib", "Thing")

    first = provider.for_reference(sid)
    second = provider.for_reference(sid)

    assert first == second == ReferencePath("Thing", "https://docs.example.org/Thing.html")
    assert oracle.resolve.call_count == 1


def test_external_misses_fall_back_to_local_pages() -> None:
    """Verify SIDs the oracle does not know are resolved locally."""
    oracle = MagicMock()
    oracle.resolve.return_value = None
    provider = _provider(location_provider=ExternalLocationProvider(oracle))

    assert provider.for_reference(FOO).url == "/reference/kotlin/com/example/Foo.html"


def test_root_package_uses_placeholder_directory() -> None:
    """Verify classes without a package live under the JVM root directory."""
    reference = _provider(Language.JAVA).for_reference(Sid("", "Main"))

    assert reference.url == "/reference/java/[JVM root]/Main.html"


def test_member_urls_point_at_the_class_page() -> None:
    """Verify every member URL is its class page plus an anchor."""
    provider = _provider()
    for name in ("alpha", "beta"):
        sid = Sid(PACKAGE, "Outer.Inner", Callable(name, ("Int", "String")))
        url = provider.for_reference(sid).url
        page, _, anchor = url.partition("#")
        assert page == provider.for_type(PACKAGE, "Outer.Inner")
        assert anchor == f"{name}(Int,String)"


def test_class_references_match_written_pages() -> None:
    """Verify links to a class equal the path its page is written to."""
    provider = _provider(Language.JAVA)
    for sid in (FOO, Sid(PACKAGE, "Outer.Inner"), Sid("", "Main")):
        page = provider.for_type(sid.package or "[JVM root]", sid.class_names)
        assert provider.for_reference(sid).url == page


def test_link_for_reference_applies_name_and_suffix() -> None:
    """Verify link records carry an override name and suffix."""
    provider = _provider()

    assert provider.link_for_reference(FOO, suffix="?") == {
        "name": "Foo?",
        "url": "/reference/kotlin/com/example/Foo.html",
    }
    assert provider.link_for_reference(FOO, name="Alias")["name"] == "Alias"


def test_package_list_oracle_builds_external_urls() -> None:
    """Verify the package-list oracle only answers for listed packages."""
    oracle = PackageListLocationOracle(
        [{"url": "https://developer.android.com/reference/", "packages": ["android.app"]}]
    )
    member = Sid("android.app", "Activity", Callable("onCreate", ("Bundle",)))

    assert (
        oracle.resolve(member)
        == "https://developer.android.com/reference/android/app/Activity.html#onCreate(Bundle)"
    )
    assert (
        oracle.resolve(Sid("android.app"))
        == "https://developer.android.com/reference/android/app/package-summary.html"
    )
    assert oracle.resolve(Sid("android.view", "View")) is None


@pytest.mark.parametrize(
    ("parts", "expected"),
    [
        (("/", "reference", "", "kotlin/"), "/reference/kotlin"),
        (("a\\b", "c"), "a/b/c"),
        (("/reference", "kotlin", "..", "java"), "/reference/java"),
    ],
)
def test_join_paths(parts, expected) -> None:
    """Verify path joining is POSIX-style on every host."""
    assert join_paths(*parts) == expected


def test_outer_class_name() -> None:
    """Verify the enclosing class name is everything before the last dot."""
    assert outer_class_name("A.B.C") == "A.B"
    assert outer_class_name("A") is None
    assert outer_class_name(None) is None
