"""Target and platform definitions.

A target is one (architecture, vendor, OS/ABI) triple cargo can compile for.
A platform groups the targets that share one staging directory, one archive
format and one output naming convention.

Supported Platforms:
    - windows: x86_64-pc-windows-gnu, i686-pc-windows-gnu (zip)
    - linux: x86_64-unknown-linux-gnu, i686-unknown-linux-gnu (tar.xz)
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from .errors import UsageError

ArchiveFormat = Literal["zip", "tar.xz"]

# 64-bit first, matching the order targets are built in
ARCHITECTURES: Tuple[str, ...] = ("x86_64", "i686")


@dataclass(frozen=True)
class TargetId:
    """One compilation target triple."""

    arch: str
    vendor: str
    os: str

    @property
    def triple(self) -> str:
        return f"{self.arch}-{self.vendor}-{self.os}"

    @property
    def is_windows(self) -> bool:
        return self.os.startswith("windows")

    def __str__(self) -> str:
        return self.triple

    @classmethod
    def parse(cls, triple: str) -> "TargetId":
        """Parse a known target triple.

        Args:
            triple: Target triple (e.g., "i686-pc-windows-gnu")

        Returns:
            Matching TargetId

        Raises:
            UsageError: If the triple is not part of any known platform
        """
        for platform in PLATFORMS.values():
            for target in platform.targets:
                if target.triple == triple:
                    return target
        raise UsageError(f"Unsupported target: {triple}")


@dataclass(frozen=True)
class PlatformId:
    """A user-facing group of targets.

    Attributes:
        name: Platform name given on the command line
        vendor: Vendor component shared by the platform's triples
        os: OS/ABI suffix shared by the platform's triples
        archive_format: Archive format used by the packager
        exe_suffix: File suffix of executables on this platform
        strip_prefix: Template for the strip toolchain prefix
    """

    name: str
    vendor: str
    os: str
    archive_format: ArchiveFormat
    exe_suffix: str = ""
    strip_prefix: str = "{triple}"

    @property
    def targets(self) -> List[TargetId]:
        return [TargetId(arch, self.vendor, self.os) for arch in ARCHITECTURES]

    def owns(self, target: TargetId) -> bool:
        return target.vendor == self.vendor and target.os == self.os

    def __str__(self) -> str:
        return self.name


PLATFORMS: Dict[str, PlatformId] = {
    "windows": PlatformId(
        name="windows",
        vendor="pc",
        os="windows-gnu",
        archive_format="zip",
        exe_suffix=".exe",
        strip_prefix="{arch}-w64-mingw32",
    ),
    "linux": PlatformId(
        name="linux",
        vendor="unknown",
        os="linux-gnu",
        archive_format="tar.xz",
    ),
}

DEFAULT_PLATFORMS: Tuple[str, ...] = ("linux", "windows")


def resolve_platform(name: str) -> PlatformId:
    """Look up a platform by name.

    Raises:
        UsageError: If the platform is unknown
    """
    platform = PLATFORMS.get(name)
    if platform is None:
        available = ", ".join(sorted(PLATFORMS))
        raise UsageError(f"Unsupported platform: {name} (available: {available})")
    return platform


def resolve_platforms(names: Optional[List[str]] = None) -> List[PlatformId]:
    """Resolve platform names in request order, defaulting to all platforms.

    Every name is validated before anything is returned, so a bad name
    never leaves half the work done.
    """
    if not names:
        names = list(DEFAULT_PLATFORMS)
    return [resolve_platform(name) for name in names]


def platform_for_target(target: TargetId) -> PlatformId:
    for platform in PLATFORMS.values():
        if platform.owns(target):
            return platform
    raise UsageError(f"Unsupported target: {target}")


def executable_name(base: str, target: TargetId) -> str:
    return base + platform_for_target(target).exe_suffix
