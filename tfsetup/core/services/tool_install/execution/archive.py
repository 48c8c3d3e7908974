"""
L4 Execution — Archive extraction.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ExtractError(Exception):
    """Raised when a downloaded archive can't yield the expected binary."""


def extract_binary(archive: Path, member: str, dest_dir: Path) -> Path:
    """Extract a single executable from a zip archive.

    Only ``member`` is written; other entries (licence files and the
    like) are left in the archive.

    Returns:
        Path to the extracted file, with the executable bit set.

    Raises:
        ExtractError: Corrupt archive, or ``member`` not present.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(archive) as zf:
            if member not in zf.namelist():
                raise ExtractError(
                    f"'{member}' not found in {archive.name} "
                    f"(contains: {', '.join(zf.namelist()[:10]) or 'nothing'})"
                )
            extracted = Path(zf.extract(member, path=dest_dir))
    except zipfile.BadZipFile as exc:
        raise ExtractError(f"Corrupt archive {archive.name}: {exc}") from exc
    except OSError as exc:
        raise ExtractError(f"Cannot extract {archive.name}: {exc}") from exc

    extracted.chmod(0o755)
    logger.debug("Extracted %s", extracted)
    return extracted
