"""Packager.

This module archives a platform's staging directory with the archiver
conventional for that platform.

Design:
    - windows: zip -qr {app}-windows.zip {app}-windows
    - linux: tar -cJf {app}-linux.tar.xz {app}-linux
    - The archiver runs from the dist directory so the archive's root entry
      is the staging directory itself
    - An existing archive is removed first; zip would otherwise update it
      in place and keep stale members
    - The staging directory is left on disk
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..errors import PackageError
from ..process import EXIT_TOOL_NOT_EXECUTABLE, EXIT_TOOL_NOT_FOUND, run_tool
from ..targets import PlatformId


@dataclass
class ArchiveArtifact:
    """Final release archive of one platform."""

    platform: PlatformId
    path: Path
    archive_format: str

    @property
    def name(self) -> str:
        return self.path.name


class Packager:
    """Creates release archives from staging directories."""

    def __init__(self, app_name: str, show_progress: bool = True):
        """Initialize packager.

        Args:
            app_name: Application name used for archive file names
            show_progress: Whether to print progress messages
        """
        self.app_name = app_name
        self.show_progress = show_progress

    def archive_name(self, platform: PlatformId) -> str:
        return f"{self.app_name}-{platform.name}.{platform.archive_format}"

    def archive_command(self, platform: PlatformId, archive_name: str, staging_name: str) -> List[str]:
        if platform.archive_format == "zip":
            return ["zip", "-qr", archive_name, staging_name]
        if platform.archive_format == "tar.xz":
            return ["tar", "-cJf", archive_name, staging_name]
        raise PackageError(platform, f"Unsupported archive format: {platform.archive_format}")

    def package(self, platform: PlatformId, staging_dir: Path) -> ArchiveArtifact:
        """Archive a populated staging directory.

        Args:
            platform: Platform being packaged
            staging_dir: The platform's staging directory

        Returns:
            ArchiveArtifact next to the staging directory

        Raises:
            PackageError: If the staging directory is missing or the
                archiver fails
        """
        staging_dir = Path(staging_dir)
        if not staging_dir.is_dir():
            raise PackageError(platform, f"Staging directory not found: {staging_dir}")

        dist_dir = staging_dir.parent
        archive_path = dist_dir / self.archive_name(platform)
        cmd = self.archive_command(platform, archive_path.name, staging_dir.name)

        if self.show_progress:
            print(f"Packaging {platform} targets into {archive_path.name}...")

        try:
            if archive_path.exists():
                archive_path.unlink()
        except OSError as e:
            raise PackageError(platform, f"Failed to remove old archive {archive_path}: {e}") from e

        returncode = run_tool(cmd, cwd=dist_dir)

        if returncode == EXIT_TOOL_NOT_FOUND:
            raise PackageError(platform, f"Archiver not found: {cmd[0]}", returncode)
        if returncode == EXIT_TOOL_NOT_EXECUTABLE:
            raise PackageError(platform, f"Archiver could not be executed: {cmd[0]}", returncode)
        if returncode != 0:
            raise PackageError(
                platform,
                f"{cmd[0]} failed for platform {platform} (exited with status {returncode})",
                returncode,
            )
        if not archive_path.exists():
            raise PackageError(platform, f"Archive was not created: {archive_path}")

        if self.show_progress:
            size = archive_path.stat().st_size
            print(f"✓ Created {archive_path.name}: {size:,} bytes ({size / 1024 / 1024:.2f} MB)")

        return ArchiveArtifact(platform=platform, path=archive_path, archive_format=platform.archive_format)
