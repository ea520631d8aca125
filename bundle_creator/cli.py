"""Command line entry point for the bundle creator.

Usage::

    bundle-creator request.yaml
    bundle-creator request.yaml --project-dir /var/www/contao --overwrite
    python -m bundle_creator request.json --no-archive
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from bundle_creator.config import Config
from bundle_creator.filesystem import LocalFileSystem
from bundle_creator.models import load_request
from bundle_creator.notifier import ConsoleNotifier
from bundle_creator.scaffolder import BundleGenerator, ZipArchiver
from bundle_creator.session import SessionStore
from bundle_creator.utils import (
    console,
    format_duration,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundle-creator",
        description="Contao Bundle Creator -- generate a bundle skeleton",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bundle-creator request.yaml\n"
            "  bundle-creator request.yaml --project-dir /var/www/contao --overwrite\n"
        ),
    )
    parser.add_argument(
        "request",
        help="Path to the request file (.yaml, .yml or .json)",
    )
    parser.add_argument(
        "--project-dir", "-p",
        default=None,
        help="Contao project root (default: $BUNDLE_CREATOR_PROJECT_DIR or .)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite an existing bundle with the same name",
    )
    parser.add_argument(
        "--no-archive",
        action="store_true",
        help="Skip creating the ZIP archive",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``bundle-creator``."""
    args = build_parser().parse_args(argv)

    req_path = Path(args.request)
    if not req_path.exists():
        print_error(f"Error: Request file not found: {req_path}")
        sys.exit(1)

    try:
        request = load_request(req_path)
    except (ValidationError, ValueError, yaml.YAMLError) as exc:
        print_error(f"Error: Invalid request file {req_path}")
        console.print(str(exc), markup=False)
        sys.exit(1)

    if args.overwrite:
        request = request.model_copy(update={"overwrite_existing": True})

    config = Config.from_env()
    if args.project_dir:
        config.project_dir = Path(args.project_dir)
    if args.no_archive:
        config.create_archive = False

    bundle_dir = config.bundle_dir(request.vendor_name, request.repository_name)
    if request.overwrite_existing and (config.project_dir / bundle_dir).exists():
        print_warning(f"Overwriting files in existing bundle {bundle_dir}")

    print_step_header(f"Generating {request.vendor_name}/{request.repository_name}")

    generator = BundleGenerator(
        LocalFileSystem(config.project_dir),
        ConsoleNotifier(),
        ZipArchiver(config.project_dir),
        SessionStore(config.session_path),
        config=config,
    )

    started = time.monotonic()
    try:
        result = generator.run(request)
    except OSError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if not result.success:
        sys.exit(1)

    print_summary_table(
        {
            "Bundle": result.bundle_dir,
            "Files": str(len(result.files)),
            "Archive": result.archive_path or "-",
            "Duration": format_duration(time.monotonic() - started),
        },
        title="Bundle Creator",
    )
    print_success("Bundle generated successfully!")


if __name__ == "__main__":
    main()
