"""Logic for building the devsite table of contents."""

from typing import Any

from refdocs.classify_package import SECTION_TITLES, classify_package
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.file_path_provider import FilePathProvider


def trim_package_prefix(name: str, prefix: str | None) -> str:
    """Drop ``prefix`` (dot implied) from a package name; never yields an empty title."""
    if not prefix:
        return name
    if not prefix.endswith("."):
        prefix += "."
    if name.startswith(prefix) and len(name) > len(prefix):
        return name[len(prefix) :]
    return name


async def build_toc(
    holder: DocumentablesHolder,
    provider: FilePathProvider,
    package_prefix_to_remove: str | None = None,
) -> dict[str, Any]:
    """Return the ``_toc.yaml`` structure; type aliases never appear in it."""
    toc: list[dict[str, Any]] = [
        {"title": "Class Index", "path": provider.classes},
        {"title": "Package Index", "path": provider.packages},
    ]
    for package in await holder.packages():
        entry: dict[str, Any] = {
            "title": trim_package_prefix(package.name, package_prefix_to_remove),
            "path": provider.for_package(package.name),
        }
        sections = await classify_package(holder, package)
        section = [
            {
                "title": title,
                "section": [
                    {
                        "title": d.sid.class_names,
                        "path": provider.for_reference(d.sid).url,
                    }
                    for d in sections[key]
                ],
            }
            for key, title in SECTION_TITLES.items()
            if sections[key]
        ]
        if section:
            entry["section"] = section
        toc.append(entry)
    return {"toc": toc}
