"""
SetupSettings — runtime knobs for a setup run.

Defaults reproduce the installer's built-in behaviour; a YAML config
file (see ``tfsetup.core.config.loader``) can override any of them.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


def _default_user_bin() -> Path:
    return Path.home() / ".local" / "bin"


class ToolOverrides(BaseModel):
    """Per-tool version pins that replace the catalogue values."""

    model_config = ConfigDict(extra="forbid")

    min_version: str | None = None
    recommended_version: str | None = None
    fallback_version: str | None = None


class SetupSettings(BaseModel):
    """Settings for one invocation of the setup workflow."""

    model_config = ConfigDict(extra="forbid")

    # ── Timeouts (seconds) ───────────────────────────────────────
    metadata_timeout: int = Field(default=10, gt=0)
    download_timeout: int = Field(default=120, gt=0)
    probe_timeout: int = Field(default=10, gt=0)
    package_manager_timeout: int = Field(default=600, gt=0)

    # ── Install locations ────────────────────────────────────────
    system_bin_dir: Path = Path("/usr/local/bin")
    user_bin_dir: Path = Field(default_factory=_default_user_bin)
    work_dir: Path | None = None  # parent of per-install temp dirs

    prefer_package_manager: bool = True

    tools: dict[str, ToolOverrides] = Field(default_factory=dict)
