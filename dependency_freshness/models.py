"""
Core data models for dependency freshness checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .versions import classify_drift


HAS_OUTDATED_TOKEN = "has_outdated_deps"
NO_OUTDATED_TOKEN = "no_outdated_deps"


@dataclass(frozen=True)
class DependencyCheck:
    """A scoped dependency as declared in the manifest and as currently published."""

    name: str
    published: str
    current: Optional[str]

    @property
    def current_version(self) -> str:
        return self.current or ""

    @property
    def outdated(self) -> bool:
        return self.published != self.current_version

    @property
    def drift(self) -> str:
        return classify_drift(self.published, self.current)

    def describe(self) -> str:
        return f"{self.name} outdated: {self.published} → {self.current_version}"


@dataclass(frozen=True)
class FreshnessReport:
    """Result of checking one package's published scoped dependencies."""

    package: str
    scope: str
    checks: Tuple[DependencyCheck, ...] = field(default_factory=tuple)

    @property
    def has_outdated(self) -> bool:
        return any(check.outdated for check in self.checks)

    @property
    def outdated(self) -> List[DependencyCheck]:
        return [check for check in self.checks if check.outdated]

    @property
    def token(self) -> str:
        return HAS_OUTDATED_TOKEN if self.has_outdated else NO_OUTDATED_TOKEN

    def to_dict(self) -> Dict:
        return {
            "package": self.package,
            "scope": self.scope,
            "status": self.token,
            "num_dependencies": len(self.checks),
            "num_outdated": len(self.outdated),
            "dependencies": [
                {
                    "dependency": check.name,
                    "published": check.published,
                    "current": check.current_version,
                    "outdated": check.outdated,
                    "drift": check.drift,
                }
                for check in self.checks
            ],
        }
