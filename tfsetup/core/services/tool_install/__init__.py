"""
Tool installation service — package re-exports.

    from tfsetup.core.services.tool_install import run_setup, check_tool

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration).
"""

# ── L0: Data ──
from tfsetup.core.services.tool_install.data.tools import TOOL_SPECS  # noqa: F401

# ── L1: Domain ──
from tfsetup.core.services.tool_install.domain.version_compare import (  # noqa: F401
    extract_version,
    version_gte,
)

# ── L3: Detection ──
from tfsetup.core.services.tool_install.detection.platform import (  # noqa: F401
    UnsupportedPlatformError,
    detect_platform,
)
from tfsetup.core.services.tool_install.detection.remote_version import (  # noqa: F401
    latest_version,
    resolve_install_version,
)
from tfsetup.core.services.tool_install.detection.tool_version import (  # noqa: F401
    check_all_tools,
    check_tool,
)

# ── L4: Execution ──
from tfsetup.core.services.tool_install.execution.installer import (  # noqa: F401
    install_tool,
)

# ── L5: Orchestration ──
from tfsetup.core.services.tool_install.orchestration.orchestrator import (  # noqa: F401
    RunMode,
    SetupReport,
    run_setup,
)
