"""
Command-line interface for the dependency freshness checker.
"""

import argparse
import logging
import sys
from pathlib import Path

from .checker import FreshnessChecker
from .config import FreshnessConfig
from .registry import build_registry
from .reporting import emit_report, export_dependency_csv, print_summary, save_results_json


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-dependency-updates",
        description=(
            "Check whether a published package declares scoped dependencies "
            "that are behind their latest published versions. Prints "
            "has_outdated_deps or no_outdated_deps."
        )
    )

    parser.add_argument(
        "package",
        help="Package name without the scope prefix (e.g. core)"
    )

    parser.add_argument(
        "--scope",
        default=None,
        help="Scope prefix of internal packages. Default: @aiready/ or $FRESHNESS_SCOPE"
    )

    parser.add_argument(
        "--registry",
        choices=["npm", "http"],
        default=None,
        help="Registry backend: the npm CLI or the registry HTTP API. Default: npm"
    )

    parser.add_argument(
        "--registry-url",
        default=None,
        help="Registry base URL for the http backend. Default: $npm_config_registry or https://registry.npmjs.org"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each registry lookup. Default: 30"
    )

    parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of concurrent version lookups. Default: 1"
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Also write JSON and CSV reports to this directory"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log registry lookups to stderr"
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        config = FreshnessConfig.from_env().with_overrides(
            scope=args.scope,
            registry=args.registry,
            registry_url=args.registry_url,
            timeout=args.timeout,
            jobs=args.jobs,
        )
        checker = FreshnessChecker(build_registry(config), scope=config.scope, jobs=config.jobs)
        checker.qualify(args.package)
    except ValueError as e:
        parser.error(str(e))

    try:
        report = checker.check(args.package)
    except Exception as e:
        print(f"Error during dependency check: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1

    emit_report(report)

    if args.verbose:
        print_summary(report)

    if args.output_dir:
        output_dir = Path(args.output_dir)
        try:
            results_file = save_results_json(report, output_dir)
            deps_file = export_dependency_csv(report, output_dir)
            logger.info("Results saved to: %s, %s", results_file, deps_file)
        except OSError as e:
            logger.error("Could not write reports to %s: %s", output_dir, e)

    return 0


if __name__ == "__main__":
    sys.exit(main())
