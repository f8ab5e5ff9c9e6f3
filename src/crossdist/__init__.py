"""
crossdist - cross-compile, strip and package release binaries.
"""

from .build.artifact_collector import ArtifactCollector, StagingEntry
from .build.build_executor import BuildExecutor
from .build.flag_policy import FlagPolicy, FlagSet, flags_for
from .config import BuildConfig, ProjectConfig
from .errors import (
    BuildError,
    CollectError,
    ConfigError,
    CrossDistError,
    PackageError,
    UsageError,
)
from .orchestrator import DistOrchestrator, DistResult, PlatformResult, parse_platform_list
from .packaging import ArchiveArtifact, Packager
from .targets import PLATFORMS, PlatformId, TargetId, platform_for_target, resolve_platforms

__version__ = "0.1.0"

__all__ = [
    "ArchiveArtifact",
    "ArtifactCollector",
    "BuildConfig",
    "BuildError",
    "BuildExecutor",
    "CollectError",
    "ConfigError",
    "CrossDistError",
    "DistOrchestrator",
    "DistResult",
    "FlagPolicy",
    "FlagSet",
    "PLATFORMS",
    "PackageError",
    "PlatformId",
    "PlatformResult",
    "Packager",
    "StagingEntry",
    "TargetId",
    "UsageError",
    "flags_for",
    "parse_platform_list",
    "platform_for_target",
    "resolve_platforms",
]
