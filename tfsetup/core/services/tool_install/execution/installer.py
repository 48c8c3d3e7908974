"""
L4 Execution — Tool installation.

Two methods:
    brew    macOS only, when Homebrew is present and the tool has a formula.
    binary  Direct download from the vendor, any platform. Also the
            fallback when brew is absent or fails.

Every failure comes back as an ``InstallOutcome`` naming its class
(download / extract / permission), never as an exception.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from tfsetup.core.models.settings import SetupSettings
from tfsetup.core.models.tool import (
    ArtifactKind,
    FailureKind,
    InstallOutcome,
    PlatformInfo,
    ToolSpec,
)
from tfsetup.core.services.tool_install.domain.download_urls import render_download_url
from tfsetup.core.services.tool_install.execution import archive, download
from tfsetup.core.services.tool_install.execution.install_dir import (
    InstallPermissionError,
    install_binary,
    is_on_path,
)
from tfsetup.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


# ── Homebrew ────────────────────────────────────────────────────


def _install_with_brew(spec: ToolSpec, settings: SetupSettings) -> InstallOutcome:
    """Install or upgrade via Homebrew."""
    formula = spec.brew_formula or spec.name
    timeout = settings.package_manager_timeout

    logger.info("Installing %s via Homebrew...", spec.label)
    if spec.brew_tap:
        tap = run_command(["brew", "tap", spec.brew_tap], timeout=timeout)
        if not tap["ok"]:
            logger.warning("brew tap %s failed: %s", spec.brew_tap, tap["error"])

    result = run_command(["brew", "install", formula], timeout=timeout)
    if not result["ok"]:
        result = run_command(["brew", "upgrade", formula], timeout=timeout)

    if not result["ok"]:
        detail = (result.get("stderr") or result["error"]).strip()
        return InstallOutcome.failed(
            spec.name,
            FailureKind.PACKAGE_MANAGER,
            f"brew install/upgrade {formula} failed: {detail}",
            method="brew",
        )

    brew_bin = shutil.which(spec.name)
    return InstallOutcome(
        tool=spec.name,
        ok=True,
        message=f"{spec.label} installed via Homebrew",
        method="brew",
        install_dir=Path(brew_bin).parent if brew_bin else None,
    )


# ── Direct download ─────────────────────────────────────────────


def _install_from_release(
    spec: ToolSpec,
    platform: PlatformInfo,
    version: str,
    settings: SetupSettings,
) -> InstallOutcome:
    """Download the vendor artifact and place the binary on disk."""
    url = render_download_url(spec, platform, version)
    fail = dict(version=version, method="binary")

    work_dir = settings.work_dir
    if work_dir is not None:
        work_dir.mkdir(parents=True, exist_ok=True)

    # The temp dir and everything in it goes away on every exit path.
    with tempfile.TemporaryDirectory(prefix=f"tfsetup-{spec.name}-", dir=work_dir) as tmp:
        tmpdir = Path(tmp)
        artifact_path = tmpdir / (
            f"{spec.name}.zip" if spec.artifact is ArtifactKind.ZIP else spec.name
        )

        logger.info("Downloading %s %s from %s", spec.label, version, url)
        try:
            download.download_file(url, artifact_path, timeout=settings.download_timeout)
        except download.DownloadError as exc:
            return InstallOutcome.failed(
                spec.name,
                FailureKind.DOWNLOAD,
                f"Failed to download {spec.label} {version}: {exc}",
                **fail,
            )

        if spec.artifact is ArtifactKind.ZIP:
            logger.info("Extracting %s", artifact_path.name)
            try:
                binary = archive.extract_binary(artifact_path, spec.name, tmpdir / "extract")
            except archive.ExtractError as exc:
                return InstallOutcome.failed(
                    spec.name,
                    FailureKind.EXTRACT,
                    f"Failed to extract {spec.label} {version}: {exc}",
                    **fail,
                )
        else:
            binary = artifact_path
            binary.chmod(0o755)

        try:
            dest = install_binary(
                binary,
                spec.name,
                system_dir=settings.system_bin_dir,
                user_dir=settings.user_bin_dir,
            )
        except InstallPermissionError as exc:
            return InstallOutcome.failed(
                spec.name,
                FailureKind.PERMISSION,
                f"Cannot install {spec.label}: {exc}",
                **fail,
            )

    logger.info("Installed %s %s to %s", spec.label, version, dest.parent)
    return InstallOutcome(
        tool=spec.name,
        ok=True,
        message=f"{spec.label} {version} installed to {dest.parent}",
        version=version,
        method="binary",
        install_dir=dest.parent,
        on_path=is_on_path(dest.parent),
    )


# ── Entry point ─────────────────────────────────────────────────


def install_tool(
    spec: ToolSpec,
    platform: PlatformInfo,
    version: str,
    *,
    settings: SetupSettings | None = None,
) -> InstallOutcome:
    """Install one tool at ``version`` for ``platform``.

    On macOS Homebrew is tried first (when enabled and present); the
    direct download runs if brew is unavailable or fails.
    """
    settings = settings or SetupSettings()

    if (
        platform.os == "macos"
        and settings.prefer_package_manager
        and spec.brew_formula
        and shutil.which("brew")
    ):
        outcome = _install_with_brew(spec, settings)
        if outcome.ok:
            return outcome
        logger.warning("%s; falling back to binary download", outcome.message)
    elif platform.os == "macos" and settings.prefer_package_manager and spec.brew_formula:
        logger.info("Homebrew not found, falling back to binary download")

    return _install_from_release(spec, platform, version, settings)
