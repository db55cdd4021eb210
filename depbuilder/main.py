"""Main CLI entry point for depbuilder.

Provides commands: build, analyze, status
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("depbuilder.cli")

from depbuilder.builders import BuilderRegistry
from depbuilder.cli.analyze import analyze_command, status_command
from depbuilder.cli.build import build_command


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def _add_module_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        help="Module root directory",
    )
    parser.add_argument(
        "-t",
        "--type",
        default="nodejs",
        help="Module type selecting the builder (default: nodejs)",
    )
    parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional builder configuration. Can be a path to a TOML/JSON "
            "file or an inline TOML/JSON string. When omitted, built-in "
            "defaults are used."
        ),
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Depbuilder - Module Build & Dependency Discovery Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Build command
    build_parser = subparsers.add_parser(
        "build",
        help="Install the module's dependencies with its native toolchain",
    )
    _add_module_arguments(build_parser)
    build_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Remove previously installed dependencies before building",
    )

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="List the module's installed dependencies as JSON",
    )
    _add_module_arguments(analyze_parser)
    analyze_parser.add_argument(
        "-o",
        "--output",
        help="Output JSON file (default: stdout)",
    )
    analyze_parser.add_argument(
        "-b",
        "--build",
        action="store_true",
        help="Build the module first when it is not built yet",
    )
    analyze_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="With --build, always rebuild from a clean install directory",
    )

    # Status command
    status_parser = subparsers.add_parser(
        "status",
        help="Report whether the module has been built",
    )
    _add_module_arguments(status_parser)

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger.debug(
        "Registered builders: %s",
        ", ".join(BuilderRegistry.get_instance().list_types()),
    )

    try:
        if args.command == "build":
            return build_command(args)
        elif args.command == "analyze":
            return analyze_command(args)
        elif args.command == "status":
            return status_command(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
        return 130


if __name__ == "__main__":
    sys.exit(main())
