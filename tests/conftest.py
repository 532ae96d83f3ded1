"""
Pytest configuration and shared fixtures for zigvm tests.
"""

import sys
from pathlib import Path
from typing import Callable, List

import pytest

from zigvm.core.directory import ZvmHome
from zigvm.core.platform import PlatformInfo, clear_platform_cache


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without I/O outside tmp_path")
    config.addinivalue_line(
        "markers", "symlinks: tests that create real symbolic links (Unix only)"
    )


def pytest_collection_modifyitems(config, items):
    """Skip symlink tests on Windows, where they need elevated privileges."""
    if sys.platform != "win32":
        return
    skip = pytest.mark.skip(reason="symlink tests require a Unix-like platform")
    for item in items:
        if "symlinks" in item.keywords:
            item.add_marker(skip)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def zvm_home(tmp_path: Path, monkeypatch) -> ZvmHome:
    """Isolated zigvm home; ZVM_DIR points at it."""
    root = tmp_path / ".zvm"
    monkeypatch.setenv("ZVM_DIR", str(root))
    return ZvmHome(root).ensure()


@pytest.fixture
def linux_platform() -> PlatformInfo:
    return PlatformInfo(os_target="linux", arch_target="x86_64")


@pytest.fixture
def windows_platform() -> PlatformInfo:
    return PlatformInfo(os_target="windows", arch_target="x86_64")


@pytest.fixture
def make_installed(zvm_home: ZvmHome) -> Callable[..., List[Path]]:
    """Create fake installed version directories."""

    def _make(*names: str) -> List[Path]:
        paths = []
        for name in names:
            path = zvm_home.versions_dir / name
            path.mkdir(parents=True)
            (path / "zig").write_text("#!/bin/sh\n")
            paths.append(path)
        return paths

    return _make


@pytest.fixture
def sleeps() -> List[float]:
    """Recorder to pass as an injectable sleep function via ``sleeps.append``."""
    return []
