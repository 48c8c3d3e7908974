"""L4 Execution — side effects: subprocesses, downloads, extraction, install."""

from tfsetup.core.services.tool_install.execution.archive import (  # noqa: F401
    ExtractError,
    extract_binary,
)
from tfsetup.core.services.tool_install.execution.download import (  # noqa: F401
    DownloadError,
    download_file,
)
from tfsetup.core.services.tool_install.execution.install_dir import (  # noqa: F401
    InstallPermissionError,
    InstallTarget,
    install_binary,
    resolve_install_dir,
)
from tfsetup.core.services.tool_install.execution.installer import (  # noqa: F401
    install_tool,
)
from tfsetup.core.services.tool_install.execution.subprocess_runner import (  # noqa: F401
    run_command,
)
