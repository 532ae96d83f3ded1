"""
Tests for atomic installation.
"""

from pathlib import Path

import pytest

from tests.mocks import FakeArchiveTool
from zigvm.core.exceptions import ArchiveToolError
from zigvm.toolchain.installer import AtomicInstaller

NAME = "zig-x86_64-linux-0.13.0"


@pytest.fixture
def archive(tmp_path) -> Path:
    path = tmp_path / "zig-download-abc"
    path.write_bytes(b"archive")
    return path


def _installer(zvm_home, tool, sleeps=None, **kwargs):
    return AtomicInstaller(
        zvm_home.versions_dir,
        archive_tool=tool,
        sleep=sleeps.append if sleeps is not None else (lambda _: None),
        **kwargs,
    )


class TestAtomicInstaller:
    """Test AtomicInstaller.install()."""

    def test_install(self, zvm_home, archive):
        tool = FakeArchiveTool(root=NAME)

        result = _installer(zvm_home, tool).install(archive)

        final = zvm_home.versions_dir / NAME
        assert result.directory_name == NAME
        assert result.path == final
        assert result.already_installed is False
        assert (final / "zig").is_file()
        assert (final / "lib" / "std.zig").is_file()
        assert not (zvm_home.versions_dir / f"{NAME}.tmp").exists()
        assert not archive.exists()
        assert tool.extracted == [zvm_home.versions_dir / f"{NAME}.tmp"]

    def test_already_installed(self, zvm_home, archive, make_installed):
        make_installed(NAME)
        marker = zvm_home.versions_dir / NAME / "marker"
        marker.write_text("existing")
        tool = FakeArchiveTool(root=NAME)

        result = _installer(zvm_home, tool).install(archive)

        assert result.already_installed is True
        assert result.path == zvm_home.versions_dir / NAME
        assert marker.read_text() == "existing"
        assert tool.extracted == []
        assert not archive.exists()

    def test_failed_extraction_leaves_no_final_directory(self, zvm_home, archive):
        tool = FakeArchiveTool(root=NAME, fail_after=1)

        with pytest.raises(ArchiveToolError):
            _installer(zvm_home, tool).install(archive)

        assert not (zvm_home.versions_dir / NAME).exists()
        # The partial staging directory is left for the next attempt to clear
        assert (zvm_home.versions_dir / f"{NAME}.tmp").is_dir()

    def test_stale_staging_directory_is_replaced(self, zvm_home, archive):
        staging = zvm_home.versions_dir / f"{NAME}.tmp"
        staging.mkdir()
        (staging / "leftover").write_text("old")

        _installer(zvm_home, FakeArchiveTool(root=NAME)).install(archive)

        final = zvm_home.versions_dir / NAME
        assert (final / "zig").is_file()
        assert not (final / "leftover").exists()
        assert not staging.exists()

    def test_interrupted_before_commit(self, zvm_home, archive, monkeypatch):
        def interrupted(self, target):
            raise KeyboardInterrupt()

        monkeypatch.setattr(Path, "rename", interrupted)

        with pytest.raises(KeyboardInterrupt):
            _installer(zvm_home, FakeArchiveTool(root=NAME)).install(archive)

        assert not (zvm_home.versions_dir / NAME).exists()

    def test_rename_is_retried(self, zvm_home, archive, monkeypatch, sleeps, caplog):
        real_rename = Path.rename
        calls = []

        def flaky(self, target):
            calls.append(target)
            if len(calls) <= 2:
                raise PermissionError("in use")
            return real_rename(self, target)

        monkeypatch.setattr(Path, "rename", flaky)

        result = _installer(zvm_home, FakeArchiveTool(root=NAME), sleeps).install(
            archive
        )

        assert result.path.is_dir()
        assert len(calls) == 3
        assert sleeps == [0.3, 0.3]
        assert caplog.text.count("Rename failed, retrying in 300ms") == 2

    def test_rename_gives_up(self, zvm_home, archive, monkeypatch, sleeps):
        def locked(self, target):
            raise PermissionError("in use")

        monkeypatch.setattr(Path, "rename", locked)

        with pytest.raises(PermissionError):
            _installer(
                zvm_home, FakeArchiveTool(root=NAME), sleeps, rename_attempts=3
            ).install(archive)

        assert len(sleeps) == 2
        assert not (zvm_home.versions_dir / NAME).exists()
