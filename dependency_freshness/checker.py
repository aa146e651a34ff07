"""
Check whether a published package declares outdated scoped dependencies.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from .config import DEFAULT_SCOPE, normalize_scope
from .interfaces import RegistryClient
from .models import DependencyCheck, FreshnessReport


logger = logging.getLogger(__name__)


class FreshnessChecker:
    """Compare a package's published scoped dependencies with the registry."""

    def __init__(
        self,
        registry: RegistryClient,
        scope: str = DEFAULT_SCOPE,
        jobs: int = 1,
    ):
        """Initialize the checker.

        Args:
            registry: Backend used for manifest and version lookups
            scope: Scope prefix of the packages to check (e.g. "@aiready/")
            jobs: Number of concurrent version lookups (1 = sequential)
        """
        if jobs < 1:
            raise ValueError(f"jobs must be at least 1, got {jobs}")
        self.registry = registry
        self.scope = normalize_scope(scope)
        self.jobs = jobs

    def qualify(self, package: str) -> str:
        """Return the scoped identifier for a package name.

        Args:
            package: Unscoped package name, or a name already carrying the scope

        Returns:
            Scoped package identifier
        """
        if package is None or not package.strip():
            raise ValueError("A package name is required")
        name = package.strip()
        if name.startswith(self.scope):
            return name
        if name.startswith("@"):
            raise ValueError(f"{name} is not in scope {self.scope}")
        return f"{self.scope}{name}"

    def fetch_published_dependencies(self, identifier: str) -> Dict[str, Any]:
        """Fetch the dependency map of the latest published version.

        A failed lookup is treated as a package without dependencies.
        """
        dependencies = self.registry.get_dependencies(identifier)
        if dependencies is None:
            logger.info("No published manifest found for %s", identifier)
            return {}
        return dependencies

    def select_scoped(self, dependencies: Dict[str, Any]) -> Dict[str, str]:
        """Keep scoped dependencies whose declared version is a string."""
        selected = {}
        for name, declared in dependencies.items():
            if not name.startswith(self.scope):
                continue
            if not isinstance(declared, str):
                logger.warning("Skipping %s: declared version %r is not a string", name, declared)
                continue
            selected[name] = declared
        return selected

    def check_dependency(self, name: str, published: str) -> DependencyCheck:
        current = self.registry.get_latest_version(name)
        if current is not None and not isinstance(current, str):
            current = None
        check = DependencyCheck(name=name, published=published, current=current)
        logger.debug("%s: published %s, current %s (%s)", name, published, check.current_version, check.drift)
        return check

    def check(self, package: str) -> FreshnessReport:
        """Run the freshness check for one package.

        Args:
            package: Package name, with or without the scope prefix

        Returns:
            FreshnessReport with one entry per scoped dependency, in manifest order
        """
        identifier = self.qualify(package)
        logger.info("Checking published dependencies of %s", identifier)

        dependencies = self.select_scoped(self.fetch_published_dependencies(identifier))
        logger.info("Found %d scoped dependencies", len(dependencies))

        checks = self._check_all(dependencies)
        return FreshnessReport(package=identifier, scope=self.scope, checks=tuple(checks))

    def _check_all(self, dependencies: Dict[str, str]) -> List[DependencyCheck]:
        if self.jobs == 1 or len(dependencies) <= 1:
            return [self.check_dependency(name, published) for name, published in dependencies.items()]

        # executor.map yields results in submission order, i.e. manifest order
        with ThreadPoolExecutor(max_workers=self.jobs) as executor:
            return list(executor.map(self.check_dependency, dependencies.keys(), dependencies.values()))


def check_package(
    package: str,
    registry: RegistryClient,
    scope: str = DEFAULT_SCOPE,
    jobs: Optional[int] = None,
) -> FreshnessReport:
    """Check a package using a one-off checker."""
    return FreshnessChecker(registry, scope=scope, jobs=1 if jobs is None else jobs).check(package)
