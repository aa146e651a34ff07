"""
Runtime configuration for the freshness checker.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


DEFAULT_SCOPE = "@aiready/"
DEFAULT_REGISTRY = "npm"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
DEFAULT_TIMEOUT = 30.0


def normalize_scope(scope: str) -> str:
    """Return the scope as an ``@name/`` prefix."""
    cleaned = scope.strip().strip("/")
    if not cleaned or cleaned == "@":
        raise ValueError(f"Invalid scope: {scope!r}")
    if not cleaned.startswith("@"):
        cleaned = f"@{cleaned}"
    return f"{cleaned}/"


@dataclass(frozen=True)
class FreshnessConfig:
    """Settings shared by the checker, the registry backends and the CLI."""

    scope: str = DEFAULT_SCOPE
    registry: str = DEFAULT_REGISTRY
    registry_url: str = DEFAULT_REGISTRY_URL
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    jobs: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "scope", normalize_scope(self.scope))
        object.__setattr__(self, "registry_url", self.registry_url.rstrip("/"))
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {self.jobs}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FreshnessConfig":
        """Build a config from defaults overridden by environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            scope=env.get("FRESHNESS_SCOPE") or DEFAULT_SCOPE,
            registry=env.get("FRESHNESS_REGISTRY") or DEFAULT_REGISTRY,
            registry_url=env.get("npm_config_registry") or DEFAULT_REGISTRY_URL,
            token=env.get("NPM_TOKEN") or None,
            timeout=float(env.get("FRESHNESS_TIMEOUT") or DEFAULT_TIMEOUT),
            jobs=int(env.get("FRESHNESS_JOBS") or 1),
        )

    def with_overrides(self, **overrides) -> "FreshnessConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
