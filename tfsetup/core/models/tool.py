"""
Tool models — what a managed CLI tool is, and what we found out about it.

ToolSpec is the static descriptor (immutable, built at import time).
ToolStatus, PlatformInfo and InstallOutcome are per-run values.
"""

from __future__ import annotations

import re
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DOTTED_VERSION = re.compile(r"^\d+(\.\d+)*$")


def _check_dotted(value: str) -> str:
    if not _DOTTED_VERSION.match(value):
        raise ValueError(f"not a dotted numeric version: {value!r}")
    return value


class ArtifactKind(StrEnum):
    """Shape of the downloaded release artifact."""

    ZIP = "zip"
    BINARY = "binary"


class ToolState(StrEnum):
    """Outcome of a version check."""

    OK = "ok"
    BELOW_RECOMMENDED = "below_recommended"
    OUTDATED = "outdated"
    MISSING = "missing"
    UNKNOWN = "unknown"  # installed, version string unparseable

    @property
    def needs_install(self) -> bool:
        return self in (ToolState.MISSING, ToolState.OUTDATED)


class FailureKind(StrEnum):
    """Why an install attempt failed."""

    DOWNLOAD = "download"
    EXTRACT = "extract"
    PERMISSION = "permission"
    PACKAGE_MANAGER = "package_manager"
    VERIFY = "verify"


class VersionProbe(BaseModel):
    """One way of asking a tool for its version."""

    model_config = ConfigDict(frozen=True)

    args: tuple[str, ...]
    json_field: str | None = None  # decode output as JSON and read this key


class ReleaseFeed(BaseModel):
    """A metadata endpoint that reports the latest published version."""

    model_config = ConfigDict(frozen=True)

    url: str
    field: str  # JSON key holding the version, e.g. "tag_name"


class ToolSpec(BaseModel):
    """Static descriptor of a managed CLI tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str = ""
    min_version: str
    recommended_version: str | None = None
    fallback_version: str = Field(..., min_length=1)

    version_probes: tuple[VersionProbe, ...] = ()
    release_feeds: tuple[ReleaseFeed, ...] = ()

    # Tokens: {version}, {os}, {arch}
    download_url: str
    artifact: ArtifactKind = ArtifactKind.BINARY

    brew_tap: str | None = None
    brew_formula: str | None = None

    @field_validator("min_version", "fallback_version")
    @classmethod
    def _validate_required_version(cls, v: str) -> str:
        return _check_dotted(v)

    @field_validator("recommended_version")
    @classmethod
    def _validate_optional_version(cls, v: str | None) -> str | None:
        return _check_dotted(v) if v is not None else None

    @property
    def label(self) -> str:
        return self.display_name or self.name


class ToolStatus(BaseModel):
    """Per-tool result of a version check."""

    tool: str
    state: ToolState
    version: str = ""

    @property
    def needs_install(self) -> bool:
        return self.state.needs_install


class PlatformInfo(BaseModel):
    """The host's operating system and CPU architecture."""

    model_config = ConfigDict(frozen=True)

    os: str  # macos | linux
    arch: str  # amd64 | arm64

    @property
    def download_os(self) -> str:
        """OS token used in vendor download URLs."""
        return "darwin" if self.os == "macos" else self.os

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"


class InstallOutcome(BaseModel):
    """Result of one install attempt."""

    tool: str
    ok: bool
    failure: FailureKind | None = None
    message: str = ""
    version: str = ""
    method: str = ""  # brew | binary
    install_dir: Path | None = None
    on_path: bool = True

    @classmethod
    def failed(
        cls,
        tool: str,
        failure: FailureKind,
        message: str,
        **kwargs,
    ) -> InstallOutcome:
        return cls(tool=tool, ok=False, failure=failure, message=message, **kwargs)
