"""
L4 Execution — Artifact download.
"""

from __future__ import annotations

import http.client
import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from tfsetup.core.services.tool_install.data.constants import (
    DOWNLOAD_TIMEOUT,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """Raised when an artifact cannot be fetched."""


def download_file(url: str, dest: Path, *, timeout: int = DOWNLOAD_TIMEOUT) -> int:
    """Stream ``url`` into ``dest``.

    Args:
        url: Artifact URL.
        dest: Target file path; its parent must exist.
        timeout: Socket timeout in seconds.

    Returns:
        Number of bytes written.

    Raises:
        DownloadError: Network error, timeout or HTTP error status.
    """
    logger.debug("Downloading %s → %s", url, dest)
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp, open(dest, "wb") as fh:
            shutil.copyfileobj(resp, fh)
    except urllib.error.HTTPError as exc:
        raise DownloadError(f"HTTP {exc.code} for {url}") from exc
    except urllib.error.URLError as exc:
        raise DownloadError(f"{exc.reason} ({url})") from exc
    except http.client.HTTPException as exc:
        raise DownloadError(f"Broken response from {url}: {exc!r}") from exc
    except OSError as exc:  # socket timeouts, disk errors
        raise DownloadError(f"{exc} ({url})") from exc

    size = dest.stat().st_size
    if size == 0:
        raise DownloadError(f"Empty response from {url}")
    logger.debug("Downloaded %d bytes", size)
    return size
