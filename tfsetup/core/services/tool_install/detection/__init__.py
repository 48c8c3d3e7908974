"""L3 Detection — read-only probes: local versions, platform, release feeds."""

from tfsetup.core.services.tool_install.detection.platform import (  # noqa: F401
    UnsupportedPlatformError,
    detect_platform,
)
from tfsetup.core.services.tool_install.detection.remote_version import (  # noqa: F401
    fetch_feed_version,
    latest_version,
    resolve_install_version,
)
from tfsetup.core.services.tool_install.detection.tool_version import (  # noqa: F401
    check_all_tools,
    check_tool,
    get_tool_version,
)
