"""
L1 Domain — Version extraction and comparison (pure).

Versions are compared segment by segment as integers; missing
trailing segments count as zero, so ``1.2 == 1.2.0``.

Known limitation: pre-release and build metadata are not ordered.
``extract_version("1.6.0-beta1")`` yields ``"1.6.0"`` and the suffix
is ignored.

No I/O, no subprocess.
"""

from __future__ import annotations

import re

# major.minor with an optional patch
_VERSION_TOKEN = re.compile(r"\d+\.\d+(?:\.\d+)?")


def extract_version(text: str) -> str | None:
    """Return the first dotted numeric version in ``text``, or None."""
    if not text:
        return None
    match = _VERSION_TOKEN.search(text)
    return match.group(0) if match else None


def parse_version(version: str) -> tuple[int, ...]:
    """Split ``"v1.10.2"`` into ``(1, 10, 2)``.

    Raises:
        ValueError: If any segment is not an integer.
    """
    cleaned = version.strip().lstrip("vV")
    if not cleaned:
        raise ValueError("empty version string")
    return tuple(int(part) for part in cleaned.split("."))


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` is lower, equal or higher than ``b``."""
    pa, pb = parse_version(a), parse_version(b)
    width = max(len(pa), len(pb))
    pa = pa + (0,) * (width - len(pa))
    pb = pb + (0,) * (width - len(pb))
    return (pa > pb) - (pa < pb)


def version_gte(a: str, b: str) -> bool:
    """True when version ``a`` is at least ``b``."""
    return compare_versions(a, b) >= 0
