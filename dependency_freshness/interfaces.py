"""
Interfaces for registry lookups.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class RegistryClient(Protocol):
    """Read-only lookups against a package registry.

    Both methods return ``None`` when the lookup fails (package not found,
    registry unreachable, timeout, unparseable response) so callers can tell
    a failure apart from a successful empty result.
    """

    def get_dependencies(self, package: str) -> Optional[Dict[str, Any]]:
        ...

    def get_latest_version(self, package: str) -> Optional[str]:
        ...
