"""
Configuration for crossdist runs.

This module provides two configuration values:
- BuildConfig: process-wide cargo knobs, fixed for every target of a run
- ProjectConfig: project layout and overrides, optionally read from a
  crossdist.ini file next to Cargo.toml

Example crossdist.ini:
    [crossdist]
    app_name = ball-gfx-hal
    dist_dir = dist

    [build]
    lto = fat

    [strip]
    i686-unknown-linux-gnu = i686-pc-linux-gnu
"""

import configparser
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional

from .build.flag_policy import FlagSet
from .errors import ConfigError, UsageError
from .targets import TargetId

CONFIG_FILE_NAME = "crossdist.ini"


@dataclass(frozen=True)
class BuildConfig:
    """Build settings shared by every cargo invocation of a run.

    Attributes:
        codegen_units: Codegen units per crate (1 = single compilation unit)
        lto: Link-time optimization mode passed as -C lto=<mode>
        incremental: Whether cargo incremental compilation stays enabled
        release: Build with --release
        verbose: Pass --verbose to cargo
    """

    codegen_units: int = 1
    lto: str = "fat"
    incremental: bool = False
    release: bool = True
    verbose: bool = True

    @property
    def profile(self) -> str:
        return "release" if self.release else "debug"

    def env_overrides(self) -> Dict[str, str]:
        """Variables that replace any ambient value."""
        return {"CARGO_INCREMENTAL": "1" if self.incremental else "0"}

    def flag_set(self) -> FlagSet:
        """Flags appended to the ambient environment for every target."""
        rustflags = ["-C", f"codegen-units={self.codegen_units}"]
        if self.lto:
            rustflags.extend(["-C", f"lto={self.lto}"])
        return FlagSet({"RUSTFLAGS": rustflags})


@dataclass
class ProjectConfig:
    """Project layout and per-project overrides.

    Attributes:
        project_dir: Cargo project root
        app_name: Name used for staged binaries, staging dirs and archives
        bin_name: Name of the binary cargo produces (defaults to app_name)
        dist_dir: Directory receiving staging trees and archives
        target_dir: Cargo target directory
        cargo: cargo executable
        strip_prefixes: Per-target strip toolchain prefix overrides
        build: Process-wide build settings
    """

    project_dir: Path
    app_name: str
    bin_name: Optional[str] = None
    dist_dir: Path = Path("dist")
    target_dir: Path = Path("target")
    cargo: str = "cargo"
    strip_prefixes: Dict[TargetId, str] = field(default_factory=dict)
    build: BuildConfig = field(default_factory=BuildConfig)

    def __post_init__(self):
        self.project_dir = Path(self.project_dir)
        if self.bin_name is None:
            self.bin_name = self.app_name
        # Relative paths are relative to the project, not the cwd
        if not Path(self.dist_dir).is_absolute():
            self.dist_dir = self.project_dir / self.dist_dir
        if not Path(self.target_dir).is_absolute():
            self.target_dir = self.project_dir / self.target_dir

    def staging_name(self, platform) -> str:
        return f"{self.app_name}-{platform}"

    def staging_dir(self, platform) -> Path:
        return self.dist_dir / self.staging_name(platform)

    @classmethod
    def load(
        cls,
        project_dir: Path,
        config_path: Optional[Path] = None,
        app_name: Optional[str] = None,
        dist_dir: Optional[Path] = None,
        verbose: Optional[bool] = None,
    ) -> "ProjectConfig":
        """Load project configuration.

        Reads crossdist.ini from the project directory when it exists (or
        the explicit config_path, which must exist). Keyword arguments that
        are not None override file values.

        Raises:
            ConfigError: If the file is missing, unparseable or invalid
        """
        project_dir = Path(project_dir).resolve()
        if config_path is None:
            default_path = project_dir / CONFIG_FILE_NAME
            config_path = default_path if default_path.exists() else None
        elif not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        parser = configparser.ConfigParser(interpolation=None)
        # Target triples are used as keys, keep their case
        parser.optionxform = str  # type: ignore[assignment]
        if config_path is not None:
            try:
                parser.read(config_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigError(f"Failed to parse {config_path}: {e}") from e

        main = parser["crossdist"] if parser.has_section("crossdist") else {}
        name = app_name or main.get("app_name") or project_dir.name

        config = cls(
            project_dir=project_dir,
            app_name=name,
            bin_name=main.get("bin_name") or None,
            dist_dir=Path(dist_dir or main.get("dist_dir", "dist")),
            target_dir=Path(main.get("target_dir", "target")),
            cargo=main.get("cargo", "cargo"),
            strip_prefixes=cls._parse_strip_section(parser),
            build=cls._parse_build_section(parser),
        )
        if verbose is not None:
            config.build = replace(config.build, verbose=verbose)
        return config

    @staticmethod
    def _parse_build_section(parser: configparser.ConfigParser) -> BuildConfig:
        if not parser.has_section("build"):
            return BuildConfig()
        section = parser["build"]
        try:
            return BuildConfig(
                codegen_units=section.getint("codegen_units", 1),
                lto=section.get("lto", "fat"),
                incremental=section.getboolean("incremental", False),
                release=section.getboolean("release", True),
                verbose=section.getboolean("verbose", True),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid value in [build] section: {e}") from e

    @staticmethod
    def _parse_strip_section(parser: configparser.ConfigParser) -> Dict[TargetId, str]:
        if not parser.has_section("strip"):
            return {}
        overrides = {}
        for triple, prefix in parser["strip"].items():
            try:
                target = TargetId.parse(triple)
            except UsageError as e:
                raise ConfigError(f"Invalid [strip] entry '{triple}': {e}") from e
            overrides[target] = prefix.strip()
        return overrides
