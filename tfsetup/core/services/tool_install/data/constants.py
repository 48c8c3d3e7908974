"""
L0 Data — Module-level constants.

Pure data. No logic.
"""

from __future__ import annotations

# OS name normalization (platform.system() → our token).
OS_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
}

# Architecture name normalization (platform.machine() → Go-style token).
#
# HashiCorp and Gruntwork both publish Go-style asset names
# (amd64/arm64), so raw uname -m values are folded into those.
ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "AMD64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",  # macOS (Darwin reports arm64)
}

# Network timeouts (seconds).
METADATA_TIMEOUT = 10
DOWNLOAD_TIMEOUT = 120

# Local probe timeout for `<tool> --version` style calls.
PROBE_TIMEOUT = 10

USER_AGENT = "tfsetup/1.0"

GITHUB_LATEST_RELEASE = "https://api.github.com/repos/{repo}/releases/latest"
HASHICORP_CHECKPOINT = "https://checkpoint-api.hashicorp.com/v1/check/{product}"
