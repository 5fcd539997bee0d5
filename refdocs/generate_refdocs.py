"""Render devsite reference page data from an analyzer symbol dump.

Reads the dump, hides suppressed symbols, propagates deprecation, resolves
what each language view displays, and writes YAML page data plus the
package list, indexes and table of contents for the templating layer.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from refdocs.run_conversion import run_conversion


def main() -> int:
    """Run the rendering process."""
    ap = argparse.ArgumentParser(
        description="Render devsite reference docs data from an analyzer symbol dump.",
    )
    ap.add_argument(
        "model_file",
        type=Path,
        help="Analyzer symbol dump (YAML or JSON)",
    )
    ap.add_argument(
        "out_dir",
        type=Path,
        help="Output directory for the generated page data",
    )
    ap.add_argument(
        "--config",
        help="Path to configuration file",
    )
    ap.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve everything but write no files",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    args = ap.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_conversion(args)


if __name__ == "__main__":
    raise SystemExit(main())
