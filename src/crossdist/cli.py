"""
Command-line interface for crossdist.

This module provides the `crossdist` CLI tool for building and packaging
release binaries.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from crossdist import __version__
from crossdist.cli_utils import (
    BannerFormatter,
    ErrorFormatter,
    MatrixFormatter,
    PathValidator,
    configure_logging,
)
from crossdist.config import ProjectConfig
from crossdist.errors import CrossDistError
from crossdist.orchestrator import DistOrchestrator, parse_platform_list


@dataclass
class DistArgs:
    """Arguments for a release run."""

    project_dir: Path
    platforms: List[str] = field(default_factory=list)
    config: Optional[Path] = None
    app_name: Optional[str] = None
    dist_dir: Optional[Path] = None
    list_only: bool = False
    quiet: bool = False
    verbose: bool = False


def cargo_verbosity(args: DistArgs) -> Optional[bool]:
    """-q drops cargo's --verbose, -v forces it; otherwise the config decides."""
    if args.quiet:
        return False
    if args.verbose:
        return True
    return None


def dist_command(args: DistArgs) -> None:
    """Build, strip and package release binaries.

    Examples:
        crossdist                      # Release all platforms
        crossdist windows              # Release windows only
        crossdist "linux windows"      # Space-separated list
        crossdist --list               # Show the target matrix
    """
    print(f"crossdist Release Packager v{__version__}")
    print()

    configure_logging(args.verbose)

    try:
        platform_names = parse_platform_list(args.platforms)

        config = ProjectConfig.load(
            args.project_dir,
            config_path=args.config,
            app_name=args.app_name,
            dist_dir=args.dist_dir,
            verbose=cargo_verbosity(args),
        )
        orchestrator = DistOrchestrator(config)

        if args.list_only:
            print(MatrixFormatter.format_matrix(orchestrator.describe(platform_names)))
            sys.exit(0)

        if args.verbose:
            print(f"Project: {config.project_dir}")
            print(f"Output: {config.dist_dir}")
            print()

        result = orchestrator.run(platform_names)

        ErrorFormatter.print_success("Release successful!")
        summary = []
        for platform_result in result.platforms:
            summary.append(f"{platform_result.platform}: {platform_result.artifact.path}")
            for entry in platform_result.entries:
                summary.append(f"  {entry.binary_name} ({entry.size:,} bytes)")
        BannerFormatter.print_banner("\n".join(summary))
        print()
        print(f"Build time: {result.build_time:.2f}s")
        sys.exit(0)

    except CrossDistError as e:
        ErrorFormatter.handle_dist_error(e)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crossdist",
        description="Cross-compile, strip and package release binaries",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"crossdist {__version__}",
    )
    parser.add_argument(
        "platforms",
        nargs="*",
        help="Platforms to release, e.g. 'windows' or 'linux windows' (default: all)",
    )
    parser.add_argument(
        "-C",
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Cargo project directory (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: crossdist.ini in the project directory)",
    )
    parser.add_argument(
        "--app-name",
        default=None,
        help="Application name used for release files (default: from config or directory name)",
    )
    parser.add_argument(
        "--dist-dir",
        type=Path,
        default=None,
        help="Output directory for staging trees and archives (default: dist)",
    )
    parser.add_argument(
        "--list",
        dest="list_only",
        action="store_true",
        help="Print the resolved target matrix and exit",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not pass --verbose to cargo",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output and pass --verbose to cargo",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """crossdist - release packaging for cross-compiled binaries."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    PathValidator.validate_project_dir(parsed_args.project_dir)

    dist_command(
        DistArgs(
            project_dir=parsed_args.project_dir,
            platforms=parsed_args.platforms,
            config=parsed_args.config,
            app_name=parsed_args.app_name,
            dist_dir=parsed_args.dist_dir,
            list_only=parsed_args.list_only,
            quiet=parsed_args.quiet,
            verbose=parsed_args.verbose,
        )
    )


if __name__ == "__main__":
    main()
