"""CLI utility functions for crossdist.

This module provides common utilities used by the crossdist command:
- Error handling and formatting
- Banner and target matrix output
- Project directory validation
- Logging setup
"""

import logging
import sys
from pathlib import Path
from typing import List

from crossdist.errors import CrossDistError, UsageError


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Build failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_dist_error(error: CrossDistError) -> None:
        """Report a release failure and exit with its exit code.

        Args:
            error: The failure that stopped the run
        """
        if isinstance(error, UsageError):
            title = "Usage error"
        else:
            title = f"{type(error).__name__.replace('Error', '')} failed!"
        ErrorFormatter.print_error(title, str(error))
        sys.exit(error.exit_code)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Release run interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class BannerFormatter:
    """Formats and displays banner messages with borders."""

    DEFAULT_WIDTH = 60
    DEFAULT_BORDER_CHAR = "="

    @staticmethod
    def format_banner(message: str, width: int = DEFAULT_WIDTH, border_char: str = DEFAULT_BORDER_CHAR) -> str:
        """Format a left-aligned banner with top and bottom borders.

        Args:
            message: The message to display (can be multi-line)
            width: Width of the banner in characters
            border_char: Character to use for borders

        Returns:
            Formatted banner string with borders
        """
        border = border_char * width
        lines = [border]
        lines.extend("  " + line for line in message.split("\n"))
        lines.append(border)
        return "\n".join(lines)

    @staticmethod
    def print_banner(message: str, width: int = DEFAULT_WIDTH, border_char: str = DEFAULT_BORDER_CHAR) -> None:
        print()
        print(BannerFormatter.format_banner(message, width=width, border_char=border_char))


class MatrixFormatter:
    """Formats the resolved target matrix for --list."""

    @staticmethod
    def format_matrix(plans: List) -> str:
        """Format target plans as an indented listing grouped by platform.

        Args:
            plans: TargetPlan entries in build order

        Returns:
            Multi-line listing
        """
        lines = []
        current = None
        for plan in plans:
            if plan.platform != current:
                current = plan.platform
                lines.append(f"{current.name} ({current.archive_format})")
            lines.append(f"  {plan.target}")
            lines.append(f"    binary: {plan.binary_name}")
            lines.append(f"    strip:  {plan.strip_prefix}-strip")
            for name, values in plan.flags.items():
                lines.append(f"    {name}: {' '.join(values)}")
        return "\n".join(lines)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_project_dir(project_dir: Path) -> None:
        """Validate that project directory exists and is a directory.

        Args:
            project_dir: Path to validate

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not project_dir.exists():
            print(f"{ErrorFormatter.RED}✗ Error: Path does not exist: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)
        if not project_dir.is_dir():
            print(f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)


def configure_logging(verbose: bool = False) -> None:
    """Send diagnostic logging to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
