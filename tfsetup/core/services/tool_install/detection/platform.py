"""
L3 Detection — Host platform resolution.

Maps ``platform.system()`` / ``platform.machine()`` onto the
{macos, linux} × {amd64, arm64} matrix we can install for.
"""

from __future__ import annotations

import logging
import platform as _platform

from tfsetup.core.models.tool import PlatformInfo
from tfsetup.core.services.tool_install.data.constants import ARCH_MAP, OS_MAP

logger = logging.getLogger(__name__)


class UnsupportedPlatformError(Exception):
    """Raised when the host OS or CPU architecture is not supported."""


def detect_platform(
    system: str | None = None,
    machine: str | None = None,
) -> PlatformInfo:
    """Resolve the current host to a ``PlatformInfo``.

    Args:
        system: Override for ``platform.system()`` (tests).
        machine: Override for ``platform.machine()`` (tests).

    Raises:
        UnsupportedPlatformError: The OS or architecture is outside the
            supported set. Nothing else can proceed on such a host.
    """
    system = system if system is not None else _platform.system()
    machine = machine if machine is not None else _platform.machine()

    os_name = OS_MAP.get(system)
    if os_name is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {system or '?'}")

    arch = ARCH_MAP.get(machine)
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {machine or '?'}")

    info = PlatformInfo(os=os_name, arch=arch)
    logger.debug("Platform: %s (system=%s machine=%s)", info, system, machine)
    return info
