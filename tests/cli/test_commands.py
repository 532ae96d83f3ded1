"""
Tests for CLI command handlers.

Handlers are called directly with an argparse Namespace, against an isolated
home (ZVM_DIR) and a fixed Linux platform.
"""

import logging
from argparse import Namespace
from unittest.mock import patch

import pytest
import responses

from tests.mocks import FakeArchiveTool
from zigvm.cli.commands import alias as alias_cmd
from zigvm.cli.commands import current as current_cmd
from zigvm.cli.commands import deactivate as deactivate_cmd
from zigvm.cli.commands import init as init_cmd
from zigvm.cli.commands import install as install_cmd
from zigvm.cli.commands import list as list_cmd
from zigvm.cli.commands import list_remote as list_remote_cmd
from zigvm.cli.commands import uninstall as uninstall_cmd
from zigvm.cli.commands import use as use_cmd
from zigvm.cli.utils import create_repository
from zigvm.core.config import MIRRORS_URL, ZIG_INDEX_URL
from zigvm.core.exceptions import AliasNotFoundError, NoVersionSpecifiedError
from zigvm.toolchain.repository import VersionRepository

NAME = "zig-x86_64-linux-0.13.0"


def _args(**kwargs):
    defaults = {"verbose": False, "quiet": False, "no_mirrors": False}
    defaults.update(kwargs)
    return Namespace(**defaults)


@pytest.fixture(autouse=True)
def _linux_host(linux_platform, zvm_home, caplog):
    caplog.set_level(logging.INFO)
    with patch(
        "zigvm.toolchain.repository.detect_platform", return_value=linux_platform
    ):
        yield


class TestCreateRepository:
    """Test create_repository()."""

    def test_uses_home_and_config(self, zvm_home):
        zvm_home.config_file.write_text("request_timeout: 5\n")

        repo = create_repository(_args())

        assert repo.home.root == zvm_home.root
        assert repo.config.request_timeout == 5.0
        assert repo.config.use_mirrors is True

    def test_no_mirrors_flag(self):
        assert create_repository(_args(no_mirrors=True)).config.use_mirrors is False


class TestInstallCommand:
    """Test install command."""

    @pytest.fixture
    def fake_repo(self, zvm_home, linux_platform):
        repo = VersionRepository(
            zvm_home, platform=linux_platform, archive_tool=FakeArchiveTool(root=NAME)
        )
        with patch("zigvm.cli.commands.install.create_repository", return_value=repo):
            yield repo

    def _serve(self):
        url = "https://ziglang.org/download/0.13.0/zig-linux-x86_64-0.13.0.tar.xz"
        responses.add(responses.GET, MIRRORS_URL, body="", status=200)
        responses.add(responses.HEAD, url, status=200)
        responses.add(responses.GET, url, body=b"x", status=200)

    @responses.activate
    def test_install(self, fake_repo, caplog):
        self._serve()

        result = install_cmd.run(_args(version="0.13.0", alias="stable"))

        assert result == 0
        assert fake_repo.installed_versions() == [NAME]
        assert "zvm use stable" in caplog.text

    @responses.activate
    def test_already_installed(self, fake_repo, make_installed, caplog):
        make_installed(NAME)
        self._serve()

        assert install_cmd.run(_args(version="0.13.0", alias=None)) == 0
        assert "already installed" in caplog.text


class TestUseCommand:
    """Test use command."""

    @pytest.mark.symlinks
    def test_use_version(self, make_installed, zvm_home, caplog, monkeypatch):
        monkeypatch.setenv("ZVM_INITIALIZED", "true")
        make_installed(NAME)

        assert use_cmd.run(_args(version="0.13.0")) == 0

        assert zvm_home.active_link.is_symlink()
        assert f"Now using {NAME}." in caplog.text
        assert "zvm init" not in caplog.text

    @pytest.mark.symlinks
    def test_use_warns_when_shell_not_initialized(
        self, make_installed, caplog, monkeypatch
    ):
        monkeypatch.delenv("ZVM_INITIALIZED", raising=False)
        make_installed(NAME)

        assert use_cmd.run(_args(version="0.13.0")) == 0
        assert "zvm init" in caplog.text

    @pytest.mark.symlinks
    def test_use_version_file(self, make_installed, tmp_path, monkeypatch, caplog):
        make_installed(NAME)
        project = tmp_path / "project"
        project.mkdir()
        (project / ".zig-version").write_text("0.13.0\n")
        monkeypatch.chdir(project)

        assert use_cmd.run(_args(version=None)) == 0
        assert "Found .zig-version file" in caplog.text

    def test_use_without_version_or_file(self, tmp_path, monkeypatch):
        workdir = tmp_path / "empty"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        with patch("zigvm.cli.commands.use.find_version_file", return_value=None):
            with pytest.raises(NoVersionSpecifiedError):
                use_cmd.run(_args(version=None))

    def test_use_not_installed(self, caplog):
        assert use_cmd.run(_args(version="0.11.0")) == 1
        assert 'Version "0.11.0" is not installed.' in caplog.text
        assert "zvm install 0.11.0" in caplog.text


class TestDeactivateCommand:
    """Test deactivate command."""

    def test_nothing_active(self, caplog):
        assert deactivate_cmd.run(_args()) == 0
        assert "No version is currently active." in caplog.text

    @pytest.mark.symlinks
    def test_deactivate(self, make_installed, zvm_home):
        make_installed(NAME)
        use_cmd.run(_args(version=NAME))

        assert deactivate_cmd.run(_args()) == 0
        assert not zvm_home.active_link.is_symlink()


class TestUninstallCommand:
    """Test uninstall command."""

    def test_uninstall(self, make_installed, zvm_home, caplog):
        make_installed(NAME)

        assert uninstall_cmd.run(_args(version="0.13.0")) == 0

        assert not (zvm_home.versions_dir / NAME).exists()
        assert f"Successfully removed {NAME}." in caplog.text


class TestAliasCommand:
    """Test alias command."""

    def test_set(self, make_installed, zvm_home):
        make_installed(NAME)

        assert alias_cmd.run(_args(name="stable", version="0.13", unset=None)) == 0
        assert '"stable": "zig-x86_64-linux-0.13.0"' in zvm_home.aliases_file.read_text()

    def test_unset(self, make_installed):
        make_installed(NAME)
        alias_cmd.run(_args(name="stable", version="0.13", unset=None))

        assert alias_cmd.run(_args(name=None, version=None, unset="stable")) == 0

    def test_unset_missing(self):
        with pytest.raises(AliasNotFoundError):
            alias_cmd.run(_args(name=None, version=None, unset="stable"))

    def test_missing_name(self, caplog):
        assert alias_cmd.run(_args(name=None, version=None, unset=None)) == 1
        assert "Usage:" in caplog.text

    def test_missing_version(self, caplog):
        assert alias_cmd.run(_args(name="stable", version=None, unset=None)) == 1
        assert "Please specify a version" in caplog.text


class TestListCommands:
    """Test list and list-remote commands."""

    def test_list_empty(self, capsys):
        assert list_cmd.run(_args()) == 0
        assert "(No versions installed yet)" in capsys.readouterr().out

    @pytest.mark.symlinks
    def test_list_marks_active_and_aliases(self, make_installed, capsys):
        make_installed(NAME, "zig-x86_64-linux-0.12.1")
        alias_cmd.run(_args(name="stable", version="0.13.0", unset=None))
        use_cmd.run(_args(version="0.13.0"))

        list_cmd.run(_args())

        out = capsys.readouterr().out
        assert f"-> {NAME} (alias: stable)" in out
        assert "   zig-x86_64-linux-0.12.1" in out

    @responses.activate
    def test_list_remote(self, capsys):
        responses.add(
            responses.GET,
            ZIG_INDEX_URL,
            json={
                "master": {"version": "0.14.0-dev.1+abc", "x86_64-linux": {}},
                "0.13.0": {"x86_64-linux": {}},
                "0.12.1": {"aarch64-macos": {}},
            },
            status=200,
        )

        assert list_remote_cmd.run(_args()) == 0

        out = capsys.readouterr().out
        assert "  - 0.13.0" in out
        assert "0.12.1" not in out
        assert "  - 0.14.0-dev.1+abc" in out


class TestCurrentCommand:
    """Test current command."""

    def test_none_active(self, caplog):
        assert current_cmd.run(_args()) == 0
        assert "No version is currently active." in caplog.text

    @pytest.mark.symlinks
    def test_reports_version(self, make_installed, capsys):
        make_installed(NAME)
        use_cmd.run(_args(version=NAME))

        with patch(
            "zigvm.cli.commands.current.zig_version", return_value="0.13.0"
        ):
            assert current_cmd.run(_args()) == 0

        out = capsys.readouterr().out
        assert f"Active version: 0.13.0 ({NAME})" in out


class TestInitCommand:
    """Test init command."""

    @pytest.mark.skipif("os.name == 'nt'")
    def test_writes_posix_script(self, zvm_home, capsys):
        assert init_cmd.run(_args()) == 0

        script = (zvm_home.root / "zvm.sh").read_text()
        assert f'export ZVM_DIR="{zvm_home.root}"' in script
        assert str(zvm_home.active_link) in script
        assert 'export ZVM_INITIALIZED="true"' in script
        assert str(zvm_home.root / "zvm.sh") in capsys.readouterr().out
