"""Utility for determining the output file path for a page."""

from pathlib import Path


def output_file_for_page(out_root: Path, page_path: str, suffix: str | None = ".yaml") -> Path:
    """Determine the output file for a site page path, creating its directory."""
    # /reference/kotlin/com/example/Foo.html -> out_root/reference/kotlin/com/example/Foo.yaml
    p = out_root / page_path.lstrip("/")
    if suffix is not None:
        p = p.with_suffix(suffix)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p
