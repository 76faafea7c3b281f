"""CLI entry point for goident."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from .analyzer import analyze_file
from .errors import ResolverError
from .output import display_results
from .package_namer import GuessPackageNamer, MappingPackageNamer, PackageNamer

logger = logging.getLogger(__name__)


def parse_package_name(value: str) -> tuple[str, str]:
    """Parse a PATH=NAME package name override."""
    path, sep, name = value.rpartition("=")
    if not sep or not path or not name:
        msg = f"expected PATH=NAME, got {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return path, name


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve package-qualified identifiers in a Go file to their import paths"
    )
    parser.add_argument(
        "target",
        help="Go file to analyze",
        type=Path,
    )
    parser.add_argument(
        "--package-name",
        action="append",
        default=[],
        type=parse_package_name,
        metavar="PATH=NAME",
        help="Declare the package name of an import path (repeatable)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Only use --package-name declarations instead of guessing names from import paths",
    )
    parser.add_argument(
        "--show-imports",
        action="store_true",
        help="Print the file's import table",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args()


def build_package_namer(args: argparse.Namespace) -> PackageNamer:
    """Build the package namer selected by the command line."""
    names = dict(args.package_name)
    if args.strict:
        return MappingPackageNamer(names)
    return GuessPackageNamer(names)


def main() -> None:
    """Run the CLI application."""
    console = Console()
    args = parse_args()

    # Configure logging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    # Validate target file
    if not args.target.exists():
        console.print(f"[red]Error: File {args.target} does not exist[/red]")
        sys.exit(1)

    if not args.target.is_file():
        console.print(f"[red]Error: {args.target} is not a file[/red]")
        sys.exit(1)

    if args.target.suffix != ".go":
        console.print(f"[red]Error: {args.target} is not a Go file[/red]")
        sys.exit(1)

    try:
        result = analyze_file(args.target, build_package_namer(args))
    except ResolverError as e:
        console.print(f"[red]Error resolving {args.target}: {e}[/red]")
        sys.exit(1)

    if result is None:
        console.print(f"[red]Error: could not parse {args.target}[/red]")
        sys.exit(1)

    display_results(console, result, show_imports=args.show_imports)


if __name__ == "__main__":
    main()
