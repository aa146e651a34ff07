"""
Dependency Freshness Checker

Reports whether a published package declares scoped dependencies that are
behind the latest published versions of those dependencies.
"""

__version__ = "0.1.0"

from .checker import FreshnessChecker, check_package
from .cli import main
from .models import DependencyCheck, FreshnessReport

__all__ = ["main", "FreshnessChecker", "check_package", "DependencyCheck", "FreshnessReport"]
