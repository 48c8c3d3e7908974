"""
L1 Domain — Download URL rendering (pure).
"""

from __future__ import annotations

from tfsetup.core.models.tool import PlatformInfo, ToolSpec


def render_download_url(spec: ToolSpec, platform: PlatformInfo, version: str) -> str:
    """Fill the tool's URL template for one platform and version.

    Raises:
        ValueError: If ``version`` is empty — a URL with a blank
            version segment would 404 in a confusing way.
    """
    version = version.strip().lstrip("v")
    if not version:
        raise ValueError(f"No version to download for {spec.name}")
    return spec.download_url.format(
        version=version,
        os=platform.download_os,
        arch=platform.arch,
    )
