"""
L4 Execution — Install directory resolution and binary placement.

Prefers the system-wide bin directory (directly writable, or via
non-interactive sudo); falls back to the per-user bin directory.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from tfsetup.core.services.tool_install.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)


class InstallPermissionError(Exception):
    """Raised when no install directory accepts the binary."""


@dataclass(frozen=True)
class InstallTarget:
    """Where a binary goes, and whether getting it there needs sudo."""

    directory: Path
    needs_sudo: bool = False


def sudo_available() -> bool:
    """True when sudo works without a password prompt."""
    if os.geteuid() == 0 or not shutil.which("sudo"):
        return False
    return run_command(["sudo", "-n", "true"], timeout=10)["ok"]


def is_on_path(directory: Path) -> bool:
    """True when ``directory`` is one of the ``PATH`` entries."""
    target = directory.resolve()
    for entry in os.environ.get("PATH", "").split(os.pathsep):
        if entry and Path(entry).expanduser().resolve() == target:
            return True
    return False


def ensure_user_dir(user_dir: Path) -> InstallTarget:
    """Create the per-user bin directory if needed.

    Raises:
        InstallPermissionError: The directory can't be created or
            isn't writable.
    """
    user_dir = user_dir.expanduser()
    try:
        user_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallPermissionError(f"Cannot create {user_dir}: {exc}") from exc
    if not os.access(user_dir, os.W_OK):
        raise InstallPermissionError(f"{user_dir} is not writable")
    return InstallTarget(directory=user_dir)


def resolve_install_dir(system_dir: Path, user_dir: Path) -> InstallTarget:
    """Choose the install directory.

    Order: ``system_dir`` if writable by us, ``system_dir`` via sudo if
    sudo needs no password, else ``user_dir`` (created if absent).
    """
    if system_dir.is_dir() and os.access(system_dir, os.W_OK):
        return InstallTarget(directory=system_dir)
    if system_dir.is_dir() and sudo_available():
        logger.info("Requires elevated permissions to install to %s", system_dir)
        return InstallTarget(directory=system_dir, needs_sudo=True)
    return ensure_user_dir(user_dir)


def place_binary(src: Path, target: InstallTarget, name: str) -> Path:
    """Move ``src`` into the target directory as ``name``, mode 0755.

    Raises:
        InstallPermissionError: The move or chmod was refused.
    """
    dest = target.directory / name

    if target.needs_sudo:
        for cmd in (
            ["sudo", "-n", "mv", "-f", str(src), str(dest)],
            ["sudo", "-n", "chmod", "755", str(dest)],
        ):
            result = run_command(cmd, timeout=60)
            if not result["ok"]:
                detail = result.get("stderr") or result["error"]
                raise InstallPermissionError(
                    f"sudo {cmd[2]} into {target.directory} failed: {detail.strip()}"
                )
        return dest

    try:
        shutil.move(str(src), str(dest))
        dest.chmod(0o755)
    except OSError as exc:
        raise InstallPermissionError(
            f"Cannot write {dest}: {exc.strerror or exc}"
        ) from exc
    return dest


def install_binary(
    src: Path,
    name: str,
    *,
    system_dir: Path,
    user_dir: Path,
) -> Path:
    """Install ``src`` as ``name``, falling back to ``user_dir``.

    Returns:
        Final path of the installed binary.

    Raises:
        InstallPermissionError: Neither directory accepted the binary.
    """
    target = resolve_install_dir(system_dir, user_dir)
    try:
        return place_binary(src, target, name)
    except InstallPermissionError as exc:
        # A failed sudo chmod leaves the binary already moved into place
        if target.directory == user_dir.expanduser() or not src.exists():
            raise
        logger.warning("%s; falling back to %s", exc, user_dir)

    return place_binary(src, ensure_user_dir(user_dir), name)
