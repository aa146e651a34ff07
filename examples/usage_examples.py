#!/usr/bin/env python3
"""
Example script showing how to use the dependency-freshness checker.
"""

from pathlib import Path

from dependency_freshness.checker import FreshnessChecker
from dependency_freshness.config import FreshnessConfig
from dependency_freshness.registry import HttpRegistry, NpmCliRegistry, build_registry
from dependency_freshness.reporting import emit_report, export_dependency_csv, save_results_json


def example_npm_cli():
    """Example: Check a package through the npm CLI."""
    print("="*60)
    print("Example 1: npm CLI backend")
    print("="*60)

    checker = FreshnessChecker(NpmCliRegistry(timeout=30))
    report = checker.check("cli")

    print(f"\nPackage: {report.package}")
    print(f"Scoped dependencies: {len(report.checks)}")
    for check in report.outdated:
        print(f"  {check.describe()} ({check.drift})")
    print(f"Status: {report.token}")


def example_http_registry():
    """Example: Check a package against the registry HTTP API with concurrent lookups."""
    print("\n" + "="*60)
    print("Example 2: HTTP backend, 4 concurrent lookups")
    print("="*60)

    checker = FreshnessChecker(
        HttpRegistry("https://registry.npmjs.org", timeout=10),
        scope="@aiready/",
        jobs=4,
    )
    report = checker.check("core")
    emit_report(report)


def example_exports():
    """Example: Use environment configuration and export the results."""
    print("\n" + "="*60)
    print("Example 3: Environment config and exports")
    print("="*60)

    config = FreshnessConfig.from_env().with_overrides(registry="http")
    checker = FreshnessChecker(build_registry(config), scope=config.scope, jobs=config.jobs)
    report = checker.check("cli")

    output_dir = Path("./output/freshness")
    print(f"Results saved to: {save_results_json(report, output_dir)}")
    print(f"Dependencies saved to: {export_dependency_csv(report, output_dir)}")


if __name__ == "__main__":
    example_npm_cli()
    example_http_registry()
    example_exports()
