"""Logic for assembling the data of a package summary page."""

from typing import Any

from refdocs.classify_package import SECTION_TITLES, classify_package
from refdocs.documentable import Documentable
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.file_path_provider import FilePathProvider
from refdocs.language import Language
from refdocs.summary_text import summary_text


def link_entry(provider: FilePathProvider, d: Documentable) -> dict[str, str]:
    reference = provider.for_reference(d.sid)
    return {"name": reference.name, "url": reference.url, "summary": summary_text(d)}


async def build_package_summary(
    holder: DocumentablesHolder, provider: FilePathProvider, package: Documentable
) -> dict[str, Any]:
    """Return the package page data; empty sections are omitted."""
    data: dict[str, Any] = {
        "name": package.name,
        "url": provider.for_package(package.name),
        "summary": summary_text(package),
    }
    sections = await classify_package(holder, package)
    for key in SECTION_TITLES:
        if sections[key]:
            data[key] = [link_entry(provider, d) for d in sections[key]]

    if holder.display_language is Language.KOTLIN:
        type_aliases = await holder.typealiases_for(package)
        if type_aliases:
            data["type_aliases"] = [
                {"name": t.name, "summary": summary_text(t)} for t in type_aliases
            ]
        top_level = [
            ("top_level_functions", [f for f in package.functions if f.receiver is None]),
            ("top_level_properties", [p for p in package.properties if p.receiver is None]),
            ("extension_functions", [f for f in package.functions if f.receiver]),
            ("extension_properties", [p for p in package.properties if p.receiver]),
        ]
        for key, members in top_level:
            if members:
                data[key] = [
                    {"name": m.name, "signature": m.sid.callable.signature()}
                    for m in members
                    if m.sid.callable is not None
                ]
    return data
