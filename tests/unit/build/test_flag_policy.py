"""
Unit tests for FlagPolicy and FlagSet.
"""

import pytest

from crossdist.build.flag_policy import (
    PANIC_ABORT_RUSTFLAGS,
    WINDOWS_GNU_CXXFLAGS,
    WINDOWS_GNU_RUSTFLAGS,
    FlagPolicy,
    FlagSet,
    flags_for,
)
from crossdist.targets import PLATFORMS, TargetId

WIN64 = TargetId.parse("x86_64-pc-windows-gnu")
WIN32 = TargetId.parse("i686-pc-windows-gnu")
LINUX64 = TargetId.parse("x86_64-unknown-linux-gnu")
LINUX32 = TargetId.parse("i686-unknown-linux-gnu")

ALL_TARGETS = [t for p in PLATFORMS.values() for t in p.targets]


class TestFlagSet:
    """Test suite for FlagSet."""

    def test_empty(self):
        flags = FlagSet()
        assert len(flags) == 0
        assert not flags
        assert flags == FlagSet({"RUSTFLAGS": []})

    def test_values_are_tuples(self):
        flags = FlagSet({"RUSTFLAGS": ["-C", "panic=abort"]})
        assert flags["RUSTFLAGS"] == ("-C", "panic=abort")

    def test_equality_and_hash(self):
        a = FlagSet({"A": ["1"], "B": ["2"]})
        b = FlagSet({"B": ["2"], "A": ["1"]})
        assert a == b
        assert hash(a) == hash(b)

    def test_source_mapping_is_copied(self):
        source = {"RUSTFLAGS": ["-C", "lto=fat"]}
        flags = FlagSet(source)
        source["RUSTFLAGS"].append("-g")
        assert flags["RUSTFLAGS"] == ("-C", "lto=fat")

    def test_merged_appends(self):
        base = FlagSet({"RUSTFLAGS": ["-C", "lto=fat"]})
        merged = base.merged(FlagSet({"RUSTFLAGS": ["-C", "panic=abort"], "CXXFLAGS": ["-static"]}))

        assert merged["RUSTFLAGS"] == ("-C", "lto=fat", "-C", "panic=abort")
        assert merged["CXXFLAGS"] == ("-static",)
        # Original untouched
        assert base == FlagSet({"RUSTFLAGS": ["-C", "lto=fat"]})

    def test_apply_appends_to_existing_value(self):
        flags = FlagSet({"RUSTFLAGS": ["-C", "panic=abort"]})
        environ = {"RUSTFLAGS": "-C opt-level=3", "PATH": "/bin"}

        env = flags.apply(environ)

        assert env["RUSTFLAGS"] == "-C opt-level=3 -C panic=abort"
        assert env["PATH"] == "/bin"
        assert environ == {"RUSTFLAGS": "-C opt-level=3", "PATH": "/bin"}

    def test_apply_sets_missing_value(self):
        env = FlagSet({"CXXFLAGS": ["-static"]}).apply({})
        assert env == {"CXXFLAGS": "-static"}

    def test_issuperset(self):
        small = FlagSet({"RUSTFLAGS": ["-a"]})
        big = FlagSet({"RUSTFLAGS": ["-a", "-b"], "CXXFLAGS": ["-c"]})
        assert big.issuperset(small)
        assert not small.issuperset(big)
        assert big.issuperset(FlagSet())


class TestFlagPolicy:
    """Test suite for FlagPolicy."""

    @pytest.mark.parametrize("target", ALL_TARGETS, ids=str)
    def test_pure_and_idempotent(self, target):
        assert FlagPolicy.flags_for(target) == FlagPolicy.flags_for(target)
        assert flags_for(target) == FlagPolicy.flags_for(target)

    @pytest.mark.parametrize("target", [LINUX64, LINUX32], ids=str)
    def test_non_windows_targets_have_no_flags(self, target):
        assert FlagPolicy.flags_for(target) == FlagSet()

    def test_windows_64_static_runtime(self):
        flags = FlagPolicy.flags_for(WIN64)

        assert flags["CXXFLAGS"] == WINDOWS_GNU_CXXFLAGS
        assert flags["RUSTFLAGS"] == WINDOWS_GNU_RUSTFLAGS
        assert "-DIMGUI_DISABLE_WIN32_DEFAULT_CLIPBOARD_FUNCTIONS" in flags["CXXFLAGS"]
        assert "-DIMGUI_DISABLE_WIN32_DEFAULT_IME_FUNCTIONS" in flags["CXXFLAGS"]
        assert "-Clink-arg=-static" in flags["RUSTFLAGS"]
        assert "panic=abort" not in flags["RUSTFLAGS"]

    def test_windows_32_adds_panic_abort(self):
        win32 = FlagPolicy.flags_for(WIN32)
        win64 = FlagPolicy.flags_for(WIN64)

        assert win32.issuperset(win64)
        assert win32 != win64
        assert win32["RUSTFLAGS"] == WINDOWS_GNU_RUSTFLAGS + PANIC_ABORT_RUSTFLAGS
        assert win32["CXXFLAGS"] == win64["CXXFLAGS"]
