"""
Domain models — Pydantic types for the setup workflow.

All models are re-exported here for convenient access:

    from tfsetup.core.models import ToolSpec, ToolStatus, PlatformInfo
"""

from tfsetup.core.models.settings import SetupSettings, ToolOverrides
from tfsetup.core.models.tool import (
    ArtifactKind,
    FailureKind,
    InstallOutcome,
    PlatformInfo,
    ReleaseFeed,
    ToolSpec,
    ToolState,
    ToolStatus,
    VersionProbe,
)

__all__ = [
    # tool.py
    "ArtifactKind",
    "FailureKind",
    "InstallOutcome",
    "PlatformInfo",
    "ReleaseFeed",
    # settings.py
    "SetupSettings",
    "ToolOverrides",
    "ToolSpec",
    "ToolState",
    "ToolStatus",
    "VersionProbe",
]
