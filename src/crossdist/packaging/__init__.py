"""Release archive creation for crossdist."""

from .packager import ArchiveArtifact, Packager

__all__ = [
    "ArchiveArtifact",
    "Packager",
]
