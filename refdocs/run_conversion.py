"""Orchestration logic for rendering reference page data from a symbol dump."""

import argparse
import asyncio
import logging
from pathlib import Path

from refdocs.build_classlike_detail import build_classlike_detail
from refdocs.build_package_summary import build_package_summary
from refdocs.checked_exception_doc_tags import add_checked_exception_doc_tags
from refdocs.devsite_configuration import DevsiteConfiguration
from refdocs.documentable import Documentable, Module
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.errors import ConfigurationError
from refdocs.external_classlike_provider import ExternalClasslikeProvider
from refdocs.external_location_provider import (
    ExternalLocationProvider,
    PackageListLocationOracle,
)
from refdocs.file_path_provider import FilePathProvider
from refdocs.language import Language
from refdocs.load_config import load_config
from refdocs.load_symbol_model import SymbolModel, load_symbol_model
from refdocs.output_file_for_page import output_file_for_page
from refdocs.path_constants import JVM_ROOT_PACKAGE
from refdocs.propagate_annotations import propagate_annotations
from refdocs.run_filter_phase import run_filter_phase
from refdocs.visibility_context import VisibilityContext
from refdocs.write_metadata import dump_yaml, write_metadata

logger = logging.getLogger(__name__)


def run_conversion(args: argparse.Namespace) -> int:
    """Execute the full rendering pipeline."""
    if not args.model_file.is_file():
        msg = f"No symbol model found at: {args.model_file}"
        raise SystemExit(msg)

    try:
        config = DevsiteConfiguration.from_dict(load_config(args.config))
    except ConfigurationError as e:
        msg = f"Invalid configuration: {e}"
        raise SystemExit(msg) from e

    model = load_symbol_model(args.model_file)
    out_root = args.out_dir.resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    written = asyncio.run(
        render_reference_docs(model, config, out_root, dry_run=args.dry_run)
    )
    if args.dry_run:
        print("Dry run complete. Nothing was written.")
        return 0
    print(f"Generated {written} reference data files into: {out_root}")
    return 0


async def render_reference_docs(
    model: SymbolModel,
    config: DevsiteConfiguration,
    out_root: Path,
    *,
    dry_run: bool = False,
) -> int:
    """Filter, transform and render every configured language view."""
    module, visibility = run_filter_phase(model.modules, config.hiding_annotations)
    module = propagate_annotations(module, config.propagating_annotations)
    module = add_checked_exception_doc_tags(module)

    # unfiltered modules, so hierarchies can be walked through hidden classes
    external_classlikes = ExternalClasslikeProvider(model.modules, model.external_classlikes)
    location_provider = None
    if config.external_docs:
        location_provider = ExternalLocationProvider(
            PackageListLocationOracle(config.external_docs)
        )

    written = 0
    for language in config.languages():
        written += await _render_language(
            language,
            module,
            visibility,
            config,
            out_root,
            external_classlikes=external_classlikes,
            location_provider=location_provider,
            dry_run=dry_run,
        )
    return written


async def _render_language(
    language: Language,
    module: Module,
    visibility: VisibilityContext,
    config: DevsiteConfiguration,
    out_root: Path,
    *,
    external_classlikes: ExternalClasslikeProvider,
    location_provider: ExternalLocationProvider | None,
    dry_run: bool,
) -> int:
    holder = DocumentablesHolder(
        language,
        module,
        visibility,
        excluded_packages=config.excluded_packages_for(language),
        external_classlikes=external_classlikes,
    )
    await holder.join()
    provider = FilePathProvider(
        language,
        config.doc_root_path,
        config.docs_path_for(language) or "",
        config.project_path,
        config.included_head_tags_path_for(language),
        location_provider,
        await holder.documentables_graph(),
    )
    packages = await holder.packages()
    logger.info("Rendering %d packages for the %s view", len(packages), language.value)
    if dry_run:
        return 0

    print(f"Writing {len(packages)} package pages for the {language.value} view...")
    written = len(
        await write_metadata(
            holder, provider, out_root, config.package_prefix_to_remove_in_toc
        )
    )
    counts = await asyncio.gather(
        *(_render_package(holder, provider, p, out_root, config) for p in packages)
    )
    return written + sum(counts)


async def _render_package(
    holder: DocumentablesHolder,
    provider: FilePathProvider,
    package: Documentable,
    out_root: Path,
    config: DevsiteConfiguration,
) -> int:
    summary = await build_package_summary(holder, provider, package)
    dump_yaml(summary, output_file_for_page(out_root, summary["url"]))
    written = 1
    for classlike in await holder.classlikes_to_display(package):
        detail = await build_classlike_detail(
            holder,
            provider,
            classlike,
            include_hidden_parent_symbols=config.include_hidden_parent_symbols,
            base_source_link=config.base_source_link,
        )
        page = provider.for_type(
            classlike.sid.package or JVM_ROOT_PACKAGE, classlike.sid.class_names or ""
        )
        dump_yaml(detail, output_file_for_page(out_root, page))
        written += 1
    return written
