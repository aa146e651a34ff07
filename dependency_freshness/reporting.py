"""
Reporting and export utilities.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import pandas as pd

from .models import FreshnessReport


logger = logging.getLogger(__name__)

DEPENDENCY_COLUMNS = ["dependency", "published", "current", "outdated", "drift"]


def emit_report(
    report: FreshnessReport,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> None:
    """Write one diagnostic line per outdated dependency to ``err`` and the token to ``out``.

    The token is the only machine-readable output and is always a single line.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    for check in report.outdated:
        print(check.describe(), file=err)
    print(report.token, file=out)


def print_summary(report: FreshnessReport) -> None:
    logger.info("=" * 60)
    logger.info("FRESHNESS RESULTS")
    logger.info("=" * 60)
    logger.info("Package: %s", report.package)
    logger.info("Scope: %s", report.scope)
    logger.info("Scoped dependencies: %d", len(report.checks))
    logger.info("Outdated: %d", len(report.outdated))
    logger.info("Status: %s", report.token)
    logger.info("=" * 60)


def _file_stem(package: str) -> str:
    return package.lstrip("@").replace("/", "__")


def save_results_json(report: FreshnessReport, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / f"{_file_stem(report.package)}_freshness.json"
    with open(results_file, 'w') as f:
        json.dump(report.to_dict(), f, indent=2, default=str)
    return results_file


def dependency_frame(report: FreshnessReport) -> pd.DataFrame:
    return pd.DataFrame(report.to_dict()["dependencies"], columns=DEPENDENCY_COLUMNS)


def export_dependency_csv(report: FreshnessReport, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    deps_file = output_dir / f"{_file_stem(report.package)}_dependencies.csv"
    dependency_frame(report).to_csv(deps_file, index=False)
    return deps_file
