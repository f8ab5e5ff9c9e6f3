"""Artifact Collector.

This module copies each built binary into its platform's staging directory
under the canonical release name and strips its debug symbols in place.

Design:
    - Staged name is {app}-{arch}, plus .exe on Windows
    - strip is run through the target's cross toolchain prefix
    - Every failure (missing binary, copy error, strip error) raises
      CollectError; an unstripped binary is never left as a release artifact
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from ..errors import CollectError
from ..process import EXIT_TOOL_NOT_EXECUTABLE, EXIT_TOOL_NOT_FOUND, run_tool
from ..targets import PlatformId, TargetId, executable_name

# Targets whose strip toolchain is not named after the cargo triple
STRIP_PREFIX_EXCEPTIONS: Dict[TargetId, str] = {
    TargetId("i686", "unknown", "linux-gnu"): "i686-pc-linux-gnu",
}


@dataclass
class StagingEntry:
    """A binary staged for packaging."""

    platform: PlatformId
    binary_name: str
    source_path: Path
    destination_path: Path
    strip_prefix: str
    size: int = 0


class ArtifactCollector:
    """Stages and strips built binaries.

    Example usage:
        collector = ArtifactCollector(Path("dist"), "ball-gfx-hal")
        entry = collector.collect(target, platform, built_binary)
        print(entry.destination_path)
    """

    def __init__(
        self,
        dist_dir: Path,
        app_name: str,
        strip_prefixes: Optional[Dict[TargetId, str]] = None,
        binary_locator: Optional[Callable[[TargetId], Path]] = None,
        show_progress: bool = True,
    ):
        """Initialize artifact collector.

        Args:
            dist_dir: Directory holding the per-platform staging directories
            app_name: Application name used for staged files
            strip_prefixes: Configured strip prefix overrides, checked before
                the built-in exceptions
            binary_locator: Maps a target to the binary cargo built for it,
                used when collect() is called without a source path
            show_progress: Whether to print progress messages
        """
        self.dist_dir = Path(dist_dir)
        self.app_name = app_name
        self.strip_prefixes = dict(strip_prefixes or {})
        self.binary_locator = binary_locator
        self.show_progress = show_progress

    def staging_dir(self, platform: PlatformId) -> Path:
        return self.dist_dir / f"{self.app_name}-{platform.name}"

    def binary_name(self, target: TargetId) -> str:
        return executable_name(f"{self.app_name}-{target.arch}", target)

    def strip_prefix(self, target: TargetId, platform: PlatformId) -> str:
        if target in self.strip_prefixes:
            return self.strip_prefixes[target]
        if target in STRIP_PREFIX_EXCEPTIONS:
            return STRIP_PREFIX_EXCEPTIONS[target]
        return platform.strip_prefix.format(arch=target.arch, triple=target.triple)

    def collect(
        self, target: TargetId, platform: PlatformId, source_path: Optional[Path] = None
    ) -> StagingEntry:
        """Copy a built binary into the staging directory and strip it.

        Args:
            target: Target the binary was built for
            platform: Platform owning the target
            source_path: Binary produced by the build (default: located
                through binary_locator)

        Returns:
            StagingEntry describing the staged file

        Raises:
            CollectError: If the binary is missing, cannot be copied, or
                strip fails
        """
        if source_path is None:
            if self.binary_locator is None:
                raise CollectError(target, f"No built binary given for target {target}")
            source_path = self.binary_locator(target)
        source_path = Path(source_path)
        if not source_path.is_file():
            raise CollectError(
                target, f"Built binary for target {target} not found: {source_path}"
            )

        staging_dir = self.staging_dir(platform)
        destination = staging_dir / self.binary_name(target)

        try:
            staging_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, destination)
        except OSError as e:
            raise CollectError(
                target, f"Failed to copy {source_path} to {destination}: {e}"
            ) from e

        prefix = self.strip_prefix(target, platform)
        self._strip(target, prefix, destination)

        size = destination.stat().st_size
        if self.show_progress:
            print(f"Staged {destination.name}: {size:,} bytes ({size / 1024 / 1024:.2f} MB)")

        return StagingEntry(
            platform=platform,
            binary_name=destination.name,
            source_path=source_path,
            destination_path=destination,
            strip_prefix=prefix,
            size=size,
        )

    def _strip(self, target: TargetId, prefix: str, binary: Path) -> None:
        strip_tool = f"{prefix}-strip"
        returncode = run_tool([strip_tool, str(binary)])

        if returncode == EXIT_TOOL_NOT_FOUND:
            raise CollectError(
                target,
                f"Strip tool not found for target {target}: {strip_tool}. "
                "Ensure the cross toolchain is installed.",
                returncode,
            )
        if returncode == EXIT_TOOL_NOT_EXECUTABLE:
            raise CollectError(
                target,
                f"Strip tool for target {target} could not be executed: {strip_tool}",
                returncode,
            )
        if returncode != 0:
            raise CollectError(
                target,
                f"{strip_tool} failed on {binary.name} (exited with status {returncode})",
                returncode,
            )
