"""
L3 Detection — Tool version checking.

Read-only probes: runs the tool's version command and parses output.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess

from tfsetup.core.models.tool import ToolSpec, ToolState, ToolStatus, VersionProbe
from tfsetup.core.services.tool_install.data.constants import PROBE_TIMEOUT
from tfsetup.core.services.tool_install.domain.version_compare import (
    extract_version,
    version_gte,
)

logger = logging.getLogger(__name__)


def _run_probe(
    executable: str,
    probe: VersionProbe,
    timeout: int,
) -> str | None:
    """Run one version probe and pull a version out of its output.

    ``FileNotFoundError`` propagates: the binary disappeared between
    lookup and execution, which the caller reports as missing.
    """
    try:
        result = subprocess.run(
            [executable, *probe.args],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.debug("%s %s timed out", executable, " ".join(probe.args))
        return None
    except FileNotFoundError:
        raise
    except OSError as exc:
        logger.debug("%s could not be run: %s", executable, exc)
        return None

    # Some tools write version to stderr
    output = (result.stdout or "") + (result.stderr or "")

    if probe.json_field:
        try:
            data = json.loads(result.stdout or "")
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        return extract_version(str(data.get(probe.json_field, "")))

    return extract_version(output)


def get_tool_version(spec: ToolSpec, *, timeout: int = PROBE_TIMEOUT) -> str | None:
    """Get the installed version of a tool.

    Tries each of the tool's version probes in order.

    Returns:
        Version string (e.g. ``"1.11.4"``) or ``None`` if no probe
        produced one.

    Raises:
        FileNotFoundError: The tool is not on the search path.
    """
    executable = shutil.which(spec.name)
    if not executable:
        raise FileNotFoundError(spec.name)

    for probe in spec.version_probes:
        version = _run_probe(executable, probe, timeout)
        if version:
            return version
    return None


def check_tool(spec: ToolSpec, *, timeout: int = PROBE_TIMEOUT) -> ToolStatus:
    """Check one tool against its minimum and recommended versions."""
    try:
        version = get_tool_version(spec, timeout=timeout)
    except FileNotFoundError:
        logger.debug("%s not found on PATH", spec.name)
        return ToolStatus(tool=spec.name, state=ToolState.MISSING)

    if not version:
        return ToolStatus(tool=spec.name, state=ToolState.UNKNOWN)

    if not version_gte(version, spec.min_version):
        state = ToolState.OUTDATED
    elif spec.recommended_version and not version_gte(version, spec.recommended_version):
        state = ToolState.BELOW_RECOMMENDED
    else:
        state = ToolState.OK

    logger.debug("%s %s → %s", spec.name, version, state)
    return ToolStatus(tool=spec.name, state=state, version=version)


def check_all_tools(
    specs: dict[str, ToolSpec],
    *,
    timeout: int = PROBE_TIMEOUT,
) -> dict[str, ToolStatus]:
    """Check every managed tool, in catalogue order."""
    return {name: check_tool(spec, timeout=timeout) for name, spec in specs.items()}
