"""
L3 Detection — Latest published version lookup.

Read-only network calls against vendor release feeds: the HashiCorp
checkpoint API and the GitHub releases API. One attempt per feed, no
retries. When every feed fails, the caller falls back to the tool's
hardcoded ``fallback_version``.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.request

from tfsetup.core.models.tool import ReleaseFeed, ToolSpec
from tfsetup.core.services.tool_install.data.constants import (
    METADATA_TIMEOUT,
    USER_AGENT,
)
from tfsetup.core.services.tool_install.domain.version_compare import extract_version

logger = logging.getLogger(__name__)


def _fetch_json(url: str, timeout: int) -> object:
    """GET ``url`` and decode the body as JSON."""
    req = urllib.request.Request(
        url,
        headers={
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        },
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read())


def fetch_feed_version(feed: ReleaseFeed, *, timeout: int = METADATA_TIMEOUT) -> str:
    """Read the latest version from one release feed.

    Returns:
        The first version-like token of the feed's field (``"v0.77.20"``
        → ``"0.77.20"``), or ``""`` on any failure.
    """
    try:
        data = _fetch_json(feed.url, timeout)
    except (OSError, ValueError, http.client.HTTPException) as exc:
        # URLError, HTTPError and socket timeouts are all OSError;
        # a non-JSON body is a ValueError.
        # HTTPException: truncated body or malformed status line.
        logger.info("Version lookup failed for %s: %s", feed.url, exc)
        return ""

    if not isinstance(data, dict):
        logger.info("Unexpected payload from %s", feed.url)
        return ""

    version = extract_version(str(data.get(feed.field) or ""))
    if not version:
        logger.info("No version in %r from %s", feed.field, feed.url)
        return ""
    return version


def latest_version(spec: ToolSpec, *, timeout: int = METADATA_TIMEOUT) -> str:
    """Latest published version of a tool, or ``""`` if no feed answered."""
    for feed in spec.release_feeds:
        version = fetch_feed_version(feed, timeout=timeout)
        if version:
            logger.debug("%s latest version %s (from %s)", spec.name, version, feed.url)
            return version
    return ""


def resolve_install_version(
    spec: ToolSpec,
    *,
    timeout: int = METADATA_TIMEOUT,
) -> tuple[str, str]:
    """Pick the version to install.

    Returns:
        ``(version, source)`` where source is ``"latest"`` or
        ``"fallback"``. The version is never empty.
    """
    version = latest_version(spec, timeout=timeout)
    if version:
        return version, "latest"
    logger.info(
        "Could not fetch latest %s version, using fallback %s",
        spec.name, spec.fallback_version,
    )
    return spec.fallback_version, "fallback"
