"""Tests for synthesised throws documentation."""

from refdocs.checked_exception_doc_tags import (
    add_checked_exception_doc_tags,
    documented_exceptions,
)
from refdocs.doc_node import DocNode
from refdocs.sid import Sid
from tests.factories import (
    JVM,
    class_sid,
    make_classlike,
    make_function,
    make_module,
    make_package,
    text_doc,
)

FOO = class_sid("Foo")
IO_EXCEPTION = Sid("java.io", "IOException")
TIMEOUT = Sid("java.util.concurrent", "TimeoutException")


def _throws_tags(function) -> list[str]:
    doc = function.documentation[JVM]
    return [c.text for c in doc.children if c.kind == "tag" and c.name == "throws"]


def _transform(*functions, constructors=()):
    foo = make_classlike("Foo", functions=functions, constructors=constructors)
    module = add_checked_exception_doc_tags(make_module(make_package(classlikes=[foo])))
    return module.packages[0].classlikes[0]


def test_undocumented_exception_gets_a_tag() -> None:
    """Verify checked exceptions without a throws tag get one appended."""
    read = make_function("read", FOO, doc=text_doc("Reads."), checked_exceptions=[IO_EXCEPTION])

    result = _transform(read).functions[0]

    assert _throws_tags(result) == ["java.io.IOException"]
    assert result.documentation[JVM].children[0].text == "Reads."


def test_documented_exception_is_left_alone() -> None:
    """Verify an existing throws tag, by simple name, suppresses the synthetic one."""
    doc = DocNode(
        "root", children=(DocNode("tag", "throws", "IOException when the disk is gone"),)
    )
    read = make_function("read", FOO, doc=doc, checked_exceptions=[IO_EXCEPTION, TIMEOUT])

    result = _transform(read).functions[0]

    assert _throws_tags(result) == [
        "IOException when the disk is gone",
        "java.util.concurrent.TimeoutException",
    ]


def test_constructors_without_docs_get_tags() -> None:
    """Verify constructors are covered and a missing doc is created."""
    ctor = make_function("Foo", FOO, checked_exceptions=[IO_EXCEPTION])

    result = _transform(constructors=[ctor]).constructors[0]

    assert _throws_tags(result) == ["java.io.IOException"]


def test_functions_without_exceptions_are_unchanged() -> None:
    """Verify functions with nothing to declare keep their identity."""
    run = make_function("run", FOO)
    assert _transform(run).functions[0] is run


def test_documented_exceptions_uses_first_word() -> None:
    """Verify only the exception name of a throws tag is considered."""
    doc = DocNode(
        "root",
        children=(
            DocNode("tag", "throws", "Oops if bad"),
            DocNode("tag", "param", "x value"),
            DocNode("tag", "throws", "  "),
        ),
    )
    assert documented_exceptions(doc) == {"Oops"}
