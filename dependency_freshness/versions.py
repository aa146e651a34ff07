"""
Version helpers for describing how a declared dependency differs from the registry.
"""

from __future__ import annotations

from typing import Optional

from packaging import version as pkg_version


CURRENT = "current"
BEHIND = "behind"
AHEAD = "ahead"
UNKNOWN = "unknown"


def parse_version(value: Optional[str]) -> Optional[pkg_version.Version]:
    """Parse a version string, tolerating a leading ``v`` and build metadata."""
    if not value:
        return None
    cleaned = value.strip()
    if cleaned.startswith(("v", "V")):
        cleaned = cleaned[1:]
    try:
        return pkg_version.parse(cleaned)
    except pkg_version.InvalidVersion:
        return None


def classify_drift(published: str, current: Optional[str]) -> str:
    """Label the direction of a mismatch between declared and current versions.

    The label is informational only. Whether a dependency counts as outdated is
    always decided by exact string comparison.
    """
    if published == (current or ""):
        return CURRENT

    published_ver = parse_version(published)
    current_ver = parse_version(current)
    if published_ver is None or current_ver is None:
        return UNKNOWN
    if published_ver < current_ver:
        return BEHIND
    if published_ver > current_ver:
        return AHEAD
    # e.g. "1.0.0" vs "v1.0.0"
    return UNKNOWN
