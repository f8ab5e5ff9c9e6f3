"""
Build components for crossdist.

This package provides the per-target build pipeline:
- Flag policy (per-target compiler/linker overrides)
- Build execution (cargo, one invocation per target)
- Artifact collection (staging and stripping binaries)
"""
