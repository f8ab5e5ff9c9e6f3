"""Error types for crossdist.

Every failure in a release run is fatal: there is no retry and no partial
success mode. Each error carries the exit code the CLI should terminate with.
"""

from typing import Optional


class CrossDistError(Exception):
    """Base class for all crossdist failures."""

    exit_code: int = 1


class UsageError(CrossDistError):
    """Raised for an unknown platform or target name.

    Always detected before any side effect takes place.
    """

    pass


class ConfigError(UsageError):
    """Raised when crossdist.ini cannot be read or holds invalid values."""

    pass


class ToolFailure(CrossDistError):
    """Base for failures of an external tool (cargo, strip, zip, tar)."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code:
            self.exit_code = exit_code
        self.returncode = exit_code


class BuildError(ToolFailure):
    """Raised when cargo fails for one target."""

    def __init__(self, target, exit_code: Optional[int] = None, message: Optional[str] = None):
        self.target = target
        if message is None:
            message = f"Build failed for target {target} (cargo exited with status {exit_code})"
        super().__init__(message, exit_code)


class CollectError(ToolFailure):
    """Raised when a built binary cannot be staged or stripped."""

    def __init__(self, target, message: str, exit_code: Optional[int] = None):
        self.target = target
        super().__init__(message, exit_code)


class PackageError(ToolFailure):
    """Raised when the archiver fails for a platform."""

    def __init__(self, platform, message: str, exit_code: Optional[int] = None):
        self.platform = platform
        super().__init__(message, exit_code)
