"""
Unit tests for Packager.

The archivers are mocked; a fake archiver writes the archive file so the
post-run checks see a real file.
"""

from unittest.mock import patch

import pytest

from crossdist.errors import PackageError
from crossdist.packaging.packager import Packager
from crossdist.targets import resolve_platform

WINDOWS = resolve_platform("windows")
LINUX = resolve_platform("linux")


class TestPackager:
    """Test suite for Packager."""

    @pytest.fixture
    def packager(self):
        return Packager("ball-gfx-hal", show_progress=False)

    @pytest.fixture
    def dist_dir(self, tmp_path):
        dist = tmp_path / "dist"
        for platform in ("windows", "linux"):
            staging = dist / f"ball-gfx-hal-{platform}"
            staging.mkdir(parents=True)
            (staging / "ball-gfx-hal-x86_64").write_bytes(b"bin")
        return dist

    @pytest.fixture
    def fake_archiver(self):
        calls = []

        def _run(cmd, cwd=None, env=None):
            calls.append((cmd, cwd))
            (cwd / cmd[2]).write_bytes(b"archive")
            return 0

        with patch("crossdist.packaging.packager.run_tool", side_effect=_run):
            yield calls

    def test_archive_names(self, packager):
        assert packager.archive_name(WINDOWS) == "ball-gfx-hal-windows.zip"
        assert packager.archive_name(LINUX) == "ball-gfx-hal-linux.tar.xz"

    def test_package_windows_zip(self, packager, dist_dir, fake_archiver):
        artifact = packager.package(WINDOWS, dist_dir / "ball-gfx-hal-windows")

        assert fake_archiver == [
            (["zip", "-qr", "ball-gfx-hal-windows.zip", "ball-gfx-hal-windows"], dist_dir)
        ]
        assert artifact.path == dist_dir / "ball-gfx-hal-windows.zip"
        assert artifact.name == "ball-gfx-hal-windows.zip"
        assert artifact.archive_format == "zip"
        assert artifact.platform is WINDOWS

    def test_package_linux_tar_xz(self, packager, dist_dir, fake_archiver):
        artifact = packager.package(LINUX, dist_dir / "ball-gfx-hal-linux")

        assert fake_archiver == [
            (["tar", "-cJf", "ball-gfx-hal-linux.tar.xz", "ball-gfx-hal-linux"], dist_dir)
        ]
        assert artifact.path == dist_dir / "ball-gfx-hal-linux.tar.xz"

    def test_package_keeps_staging_dir(self, packager, dist_dir, fake_archiver):
        staging = dist_dir / "ball-gfx-hal-linux"
        packager.package(LINUX, staging)

        assert (staging / "ball-gfx-hal-x86_64").exists()

    def test_package_removes_old_archive_first(self, packager, dist_dir):
        old = dist_dir / "ball-gfx-hal-windows.zip"
        old.write_bytes(b"stale archive")

        def _run(cmd, cwd=None, env=None):
            assert not old.exists()
            old.write_bytes(b"new archive")
            return 0

        with patch("crossdist.packaging.packager.run_tool", side_effect=_run):
            packager.package(WINDOWS, dist_dir / "ball-gfx-hal-windows")

        assert old.read_bytes() == b"new archive"

    def test_package_missing_staging_dir(self, packager, tmp_path):
        with patch("crossdist.packaging.packager.run_tool") as mock_run:
            with pytest.raises(PackageError, match="Staging directory not found"):
                packager.package(LINUX, tmp_path / "nope")

        mock_run.assert_not_called()

    def test_package_archiver_failure(self, packager, dist_dir):
        with patch("crossdist.packaging.packager.run_tool", return_value=2):
            with pytest.raises(PackageError, match="tar failed for platform linux") as exc_info:
                packager.package(LINUX, dist_dir / "ball-gfx-hal-linux")

        assert exc_info.value.exit_code == 2
        assert exc_info.value.platform is LINUX

    def test_package_archiver_missing(self, packager, dist_dir):
        with patch("crossdist.packaging.packager.run_tool", return_value=127):
            with pytest.raises(PackageError, match="Archiver not found: zip"):
                packager.package(WINDOWS, dist_dir / "ball-gfx-hal-windows")

    def test_package_archiver_not_executable(self, packager, dist_dir):
        with patch("crossdist.packaging.packager.run_tool", return_value=126):
            with pytest.raises(PackageError, match="could not be executed: tar") as exc_info:
                packager.package(LINUX, dist_dir / "ball-gfx-hal-linux")

        assert exc_info.value.platform is LINUX
        assert exc_info.value.exit_code == 126

    def test_package_no_archive_produced(self, packager, dist_dir):
        with patch("crossdist.packaging.packager.run_tool", return_value=0):
            with pytest.raises(PackageError, match="Archive was not created"):
                packager.package(WINDOWS, dist_dir / "ball-gfx-hal-windows")
