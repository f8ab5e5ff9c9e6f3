"""Build Executor.

This module runs cargo once per target with that target's flags.

Design:
    - Builds the child environment from a copy of the ambient environment,
      so flag overrides for one target never reach another
    - Process-wide knobs come from an explicit BuildConfig, not os.environ
    - Streams cargo's output instead of capturing it
    - Raises BuildError with cargo's exit status on failure
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from ..config import BuildConfig
from ..errors import BuildError
from ..process import EXIT_TOOL_NOT_EXECUTABLE, EXIT_TOOL_NOT_FOUND, run_tool
from ..targets import TargetId, executable_name
from .flag_policy import FlagSet


class BuildExecutor:
    """Executes cargo builds for individual targets.

    This class handles:
    - Composing the per-target build environment
    - Building the cargo command line
    - Reporting failures with the failing target and exit status
    - Locating the binary cargo produced
    """

    def __init__(
        self,
        project_dir: Path,
        bin_name: str,
        build_config: Optional[BuildConfig] = None,
        target_dir: Optional[Path] = None,
        cargo: str = "cargo",
        environ: Optional[Mapping[str, str]] = None,
        show_progress: bool = True,
    ):
        """Initialize build executor.

        Args:
            project_dir: Cargo project root (cargo runs here)
            bin_name: Name of the binary target cargo produces
            build_config: Process-wide build settings
            target_dir: Cargo target directory (default: project_dir/target)
            cargo: cargo executable
            environ: Base environment (default: os.environ at build time)
            show_progress: Whether to print progress messages
        """
        self.project_dir = Path(project_dir)
        self.bin_name = bin_name
        self.build_config = build_config or BuildConfig()
        self.target_dir = Path(target_dir) if target_dir else self.project_dir / "target"
        self.cargo = cargo
        self.environ = environ
        self.show_progress = show_progress

    def build(self, target: TargetId, flags: Optional[FlagSet] = None) -> Path:
        """Build the project for one target.

        Args:
            target: Target to build
            flags: Target-specific flag overrides

        Returns:
            Path to the binary cargo produced

        Raises:
            BuildError: If cargo exits with a nonzero status
        """
        env = self.build_env(flags or FlagSet())
        cmd = self.build_command(target)

        if self.show_progress:
            print(f"Building target {target}...")

        returncode = run_tool(cmd, cwd=self.project_dir, env=env)

        if returncode == EXIT_TOOL_NOT_FOUND:
            raise BuildError(
                target,
                returncode,
                f"Build failed for target {target}: cargo not found ({self.cargo}). "
                "Ensure the Rust toolchain is installed.",
            )
        if returncode == EXIT_TOOL_NOT_EXECUTABLE:
            raise BuildError(
                target,
                returncode,
                f"Build failed for target {target}: cargo could not be executed ({self.cargo})",
            )
        if returncode != 0:
            raise BuildError(target, returncode)

        return self.binary_path(target)

    def build_command(self, target: TargetId) -> List[str]:
        cmd = [self.cargo, "build"]
        if self.build_config.release:
            cmd.append("--release")
        cmd.extend(["--target", target.triple])
        if self.build_config.verbose:
            cmd.append("--verbose")
        return cmd

    def build_env(self, flags: FlagSet) -> Dict[str, str]:
        """Compose the environment for a single cargo invocation.

        Args:
            flags: Target-specific flag overrides

        Returns:
            A fresh environment dictionary; the base environment is not modified
        """
        base = os.environ if self.environ is None else self.environ
        env = dict(base)
        env.update(self.build_config.env_overrides())
        return self.build_config.flag_set().merged(flags).apply(env)

    def binary_path(self, target: TargetId) -> Path:
        """Conventional cargo output path for a target."""
        return (
            self.target_dir
            / target.triple
            / self.build_config.profile
            / executable_name(self.bin_name, target)
        )
