"""
Release orchestration for crossdist.

This module drives a complete release run. For each requested platform, in
request order and strictly one at a time:
1. Recreate the platform's staging directory (stale binaries never survive)
2. Build every target of the platform with its flag overrides
3. Stage and strip every built binary
4. Archive the staging directory

Any failure stops the run immediately. Platforms completed earlier in the
same run keep their archives; the failing platform is never packaged.
"""

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .build.artifact_collector import ArtifactCollector, StagingEntry
from .build.build_executor import BuildExecutor
from .build.flag_policy import FlagPolicy, FlagSet
from .config import ProjectConfig
from .errors import PackageError
from .packaging.packager import ArchiveArtifact, Packager
from .targets import PlatformId, TargetId, resolve_platforms


@dataclass
class TargetPlan:
    """What a run will do for one target."""

    platform: PlatformId
    target: TargetId
    binary_name: str
    strip_prefix: str
    flags: FlagSet


@dataclass
class PlatformResult:
    """Result of one fully packaged platform."""

    platform: PlatformId
    entries: List[StagingEntry]
    artifact: ArchiveArtifact
    build_time: float


@dataclass
class DistResult:
    """Result of a complete release run."""

    platforms: List[PlatformResult] = field(default_factory=list)
    build_time: float = 0.0

    @property
    def artifacts(self) -> List[ArchiveArtifact]:
        return [result.artifact for result in self.platforms]


def parse_platform_list(values: Optional[Iterable[str]] = None) -> List[str]:
    """Split platform arguments into names.

    Each value may hold a single name or a space-separated list, so
    ["linux windows"] and ["linux", "windows"] are equivalent.

    Returns:
        Platform names in request order (empty means "all platforms")
    """
    names: List[str] = []
    for value in values or []:
        names.extend(value.split())
    return names


class DistOrchestrator:
    """
    Orchestrates release builds across platforms.

    Example usage:
        config = ProjectConfig.load(Path("."))
        orchestrator = DistOrchestrator(config)
        result = orchestrator.run(["windows"])
        for artifact in result.artifacts:
            print(artifact.path)
    """

    def __init__(
        self,
        config: ProjectConfig,
        executor: Optional[BuildExecutor] = None,
        collector: Optional[ArtifactCollector] = None,
        packager: Optional[Packager] = None,
        show_progress: bool = True,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Project configuration (carries the run's BuildConfig)
            executor: Build executor (default: cargo executor for config)
            collector: Artifact collector (default: one staging into config.dist_dir)
            packager: Packager (default: one naming archives after config.app_name)
            show_progress: Whether to print progress messages
        """
        self.config = config
        self.show_progress = show_progress
        self.executor = executor or BuildExecutor(
            project_dir=config.project_dir,
            bin_name=config.bin_name or config.app_name,
            build_config=config.build,
            target_dir=config.target_dir,
            cargo=config.cargo,
            show_progress=show_progress,
        )
        self.collector = collector or ArtifactCollector(
            dist_dir=config.dist_dir,
            app_name=config.app_name,
            strip_prefixes=config.strip_prefixes,
            binary_locator=self.executor.binary_path,
            show_progress=show_progress,
        )
        self.packager = packager or Packager(config.app_name, show_progress=show_progress)

    def describe(self, platform_names: Optional[List[str]] = None) -> List[TargetPlan]:
        """Resolve the target matrix without building anything.

        Raises:
            UsageError: If a platform name is unknown
        """
        plans = []
        for platform in resolve_platforms(platform_names):
            for target in platform.targets:
                plans.append(
                    TargetPlan(
                        platform=platform,
                        target=target,
                        binary_name=self.collector.binary_name(target),
                        strip_prefix=self.collector.strip_prefix(target, platform),
                        flags=FlagPolicy.flags_for(target),
                    )
                )
        return plans

    def run(self, platform_names: Optional[List[str]] = None) -> DistResult:
        """
        Build, stage and package the requested platforms.

        Args:
            platform_names: Platforms to release (default: all known platforms)

        Returns:
            DistResult with one PlatformResult per platform

        Raises:
            UsageError: If a platform name is unknown (before any side effect)
            BuildError: If cargo fails for a target
            CollectError: If a binary cannot be staged or stripped
            PackageError: If archiving fails or the staging directory cannot be
                recreated
        """
        start_time = time.time()
        # Resolve everything up front so a typo fails before any work starts
        platforms = resolve_platforms(platform_names)

        result = DistResult()
        for platform in platforms:
            result.platforms.append(self._run_platform(platform))

        result.build_time = time.time() - start_time
        return result

    def _run_platform(self, platform: PlatformId) -> PlatformResult:
        start_time = time.time()
        targets = platform.targets

        if self.show_progress:
            print(f"Building all {platform} targets...")

        staging_dir = self.collector.staging_dir(platform)
        self._recreate_staging_dir(platform, staging_dir)

        entries = []
        total = len(targets)
        for i, target in enumerate(targets, 1):
            if self.show_progress:
                print(f"[{i}/{total}] {target}")
            flags = FlagPolicy.flags_for(target)
            if flags:
                logging.debug(f"Flag overrides for {target}: {dict(flags)}")
            binary = self.executor.build(target, flags)
            entries.append(self.collector.collect(target, platform, binary))

        artifact = self.packager.package(platform, staging_dir)

        return PlatformResult(
            platform=platform,
            entries=entries,
            artifact=artifact,
            build_time=time.time() - start_time,
        )

    def _recreate_staging_dir(self, platform: PlatformId, staging_dir: Path) -> None:
        try:
            if staging_dir.exists():
                logging.debug(f"Removing stale staging directory {staging_dir}")
                shutil.rmtree(staging_dir)
            staging_dir.mkdir(parents=True)
        except OSError as e:
            raise PackageError(
                platform, f"Failed to recreate staging directory {staging_dir}: {e}"
            ) from e
