"""L5 Orchestration — the check → install → re-check run."""

from tfsetup.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    RunMode,
    SetupReport,
    managed_tools,
    run_setup,
)
