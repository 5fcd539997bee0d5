"""Logic for writing the site-wide index and navigation files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from refdocs.build_package_summary import link_entry
from refdocs.build_toc import build_toc
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.file_path_provider import FilePathProvider
from refdocs.output_file_for_page import output_file_for_page
from refdocs.path_constants import ROOT_PACKAGE
from refdocs.summary_text import summary_text

logger = logging.getLogger(__name__)


def dump_yaml(data: Any, path: Path) -> Path:
    path.write_text(
        yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8"
    )
    return path


async def write_metadata(
    holder: DocumentablesHolder,
    provider: FilePathProvider,
    out_root: Path,
    package_prefix_to_remove: str | None = None,
) -> list[Path]:
    """Write package list, root index, package/class indexes and TOC."""
    packages = [p for p in await holder.packages() if p.name and p.name != ROOT_PACKAGE]
    written = []

    package_list = output_file_for_page(out_root, provider.package_list, suffix=None)
    package_list.write_text("".join(f"{p.name}\n" for p in packages), encoding="utf-8")
    written.append(package_list)

    written.append(
        dump_yaml(
            {"redirect": provider.classes},
            output_file_for_page(out_root, provider.root_index),
        )
    )

    package_index = [
        {"name": p.name, "url": provider.for_package(p.name), "summary": summary_text(p)}
        for p in packages
    ]
    written.append(
        dump_yaml(
            {"packages": package_index},
            output_file_for_page(out_root, provider.packages),
        )
    )

    letters: dict[str, list[dict[str, str]]] = {}
    classlikes = sorted(
        await holder.all_classlikes_to_display(),
        key=lambda d: ((d.sid.class_names or "").lower(), d.sid.package),
    )
    for d in classlikes:
        letter = (d.sid.class_names or "?")[0].upper()
        letters.setdefault(letter, []).append(link_entry(provider, d))
    written.append(
        dump_yaml(
            {"letters": dict(sorted(letters.items()))},
            output_file_for_page(out_root, provider.classes),
        )
    )

    toc = await build_toc(holder, provider, package_prefix_to_remove)
    written.append(dump_yaml(toc, output_file_for_page(out_root, provider.toc, suffix=None)))

    logger.info("Wrote metadata for %d packages under %s", len(packages), provider.root_path)
    return written
