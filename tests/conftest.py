"""
Shared test fixtures and configuration.
"""

import io
import zipfile
from pathlib import Path

import pytest

from tfsetup.core.models import PlatformInfo, SetupSettings


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings(tmp_path: Path) -> SetupSettings:
    """Settings that keep every install side effect inside tmp_path."""
    system_bin = tmp_path / "system-bin"
    system_bin.mkdir()
    return SetupSettings(
        system_bin_dir=system_bin,
        user_bin_dir=tmp_path / "user-bin",
        work_dir=tmp_path / "work",
        prefer_package_manager=False,
    )


@pytest.fixture
def linux_amd64() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="amd64")


@pytest.fixture
def macos_arm64() -> PlatformInfo:
    return PlatformInfo(os="macos", arch="arm64")


@pytest.fixture
def zip_bytes():
    """Factory: build an in-memory zip holding the given members."""

    def _make(**members: bytes) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as zf:
            for name, content in members.items():
                zf.writestr(name, content)
        return buf.getvalue()

    return _make
