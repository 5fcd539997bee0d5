"""File names shared by the path provider and the metadata writer."""

INDEX_FILE = "index"
PACKAGE_SUMMARY = "package-summary"
PACKAGE_LIST = "package-list"
PACKAGES_FILE = "packages.html"
CLASSES_FILE = "classes.html"
TOC_FILE = "_toc.yaml"
BOOK_FILE = "_book.yaml"

JVM_ROOT_PACKAGE = "[JVM root]"
ROOT_PACKAGE = "[root]"

# Compiler-synthesised function types never get a page.
NON_DOCUMENTABLE_PREFIXES = ("kotlin.jvm.functions", "kotlin.coroutines.SuspendFunction")
