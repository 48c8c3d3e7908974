"""L1 Domain — pure functions: version maths, URL rendering, overrides."""

from tfsetup.core.services.tool_install.domain.download_urls import (  # noqa: F401
    render_download_url,
)
from tfsetup.core.services.tool_install.domain.overrides import (  # noqa: F401
    apply_overrides,
)
from tfsetup.core.services.tool_install.domain.version_compare import (  # noqa: F401
    compare_versions,
    extract_version,
    parse_version,
    version_gte,
)
