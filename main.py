"""Main orchestration script for dumping symbols and rendering reference docs."""

import argparse
import shlex
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> None:
    """Run the full reference docs generation pipeline."""
    parser = argparse.ArgumentParser(
        description="Dump analyzer symbols and render devsite reference docs data."
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run the test suite before generating documentation",
    )
    parser.add_argument(
        "--analyzer-cmd",
        help="Command that writes the symbol dump (skipped when omitted)",
    )
    parser.add_argument(
        "--model",
        type=Path,
        help="Path of the symbol dump (default: symbols.yaml next to this script)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        help="Output directory (default: refdocs_out next to this script)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve everything but write no files",
    )
    parser.add_argument(
        "--config",
        help="Path to configuration file",
    )
    args = parser.parse_args()

    root_dir = Path(__file__).parent
    model = args.model or root_dir / "symbols.yaml"
    out_dir = args.out_dir or root_dir / "refdocs_out"

    if args.dev:
        print("--- Running Development Checks ---")
        run_command([sys.executable, "-m", "pytest"], cwd=root_dir)
        print("\nDevelopment checks passed. Proceeding with documentation generation.\n")

    if args.analyzer_cmd:
        print("--- Step 1: Dumping analyzer symbols ---")
        run_command(shlex.split(args.analyzer_cmd), cwd=root_dir)

    print("\n--- Step 2: Rendering reference docs data ---")
    cmd = [
        sys.executable,
        "-m",
        "refdocs.generate_refdocs",
        str(model),
        str(out_dir),
    ]
    if args.dry_run:
        cmd.append("--dry-run")
    if args.config:
        cmd.extend(["--config", args.config])

    run_command(cmd, cwd=root_dir)

    print(f"\nSUCCESS: Reference docs data generated in {out_dir}")


if __name__ == "__main__":
    main()
