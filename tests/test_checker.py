"""Tests for the freshness checker."""

import pytest

from dependency_freshness.checker import FreshnessChecker, check_package


def test_matching_dependency_is_not_outdated(fake_registry):
    registry = fake_registry(
        manifests={"@aiready/cli": {"@aiready/dep-a": "1.2.0"}},
        versions={"@aiready/dep-a": "1.2.0"},
    )

    report = FreshnessChecker(registry).check("cli")

    assert report.package == "@aiready/cli"
    assert report.token == "no_outdated_deps"
    assert report.outdated == []


def test_single_mismatch_is_reported(fake_registry):
    registry = fake_registry(
        manifests={"@aiready/cli": {"@aiready/dep-a": "1.2.0", "@aiready/dep-b": "0.9.0"}},
        versions={"@aiready/dep-a": "1.3.0", "@aiready/dep-b": "0.9.0"},
    )

    report = FreshnessChecker(registry).check("cli")

    assert report.token == "has_outdated_deps"
    assert [check.name for check in report.outdated] == ["@aiready/dep-a"]
    assert report.outdated[0].describe() == "@aiready/dep-a outdated: 1.2.0 → 1.3.0"


def test_unscoped_dependencies_are_ignored(fake_registry):
    registry = fake_registry(
        manifests={"@aiready/cli": {"@aiready/dep-a": "1.0.0", "other-pkg": "4.0.0"}},
        versions={"@aiready/dep-a": "1.0.0", "other-pkg": "5.0.0"},
    )

    report = FreshnessChecker(registry).check("cli")

    assert report.token == "no_outdated_deps"
    assert [check.name for check in report.checks] == ["@aiready/dep-a"]
    assert ("version", "other-pkg") not in registry.calls


def test_unpublished_package_reports_no_outdated(fake_registry):
    registry = fake_registry()

    report = FreshnessChecker(registry).check("never-published")

    assert report.token == "no_outdated_deps"
    assert report.checks == ()
    assert registry.calls == [("dependencies", "@aiready/never-published")]


def test_failed_version_lookup_counts_as_empty(fake_registry):
    registry = fake_registry(manifests={"@aiready/cli": {"@aiready/dep-a": "1.0.0"}})

    report = FreshnessChecker(registry).check("cli")

    assert report.has_outdated
    assert report.outdated[0].describe() == "@aiready/dep-a outdated: 1.0.0 → "


def test_empty_declared_version_matches_failed_lookup(fake_registry):
    registry = fake_registry(manifests={"@aiready/cli": {"@aiready/dep-a": ""}})

    report = FreshnessChecker(registry).check("cli")

    assert report.token == "no_outdated_deps"


def test_non_string_declared_version_is_skipped(fake_registry):
    registry = fake_registry(
        manifests={"@aiready/cli": {"@aiready/dep-a": {"version": "1.0.0"}, "@aiready/dep-b": "2.0.0"}},
        versions={"@aiready/dep-a": "9.9.9", "@aiready/dep-b": "2.0.0"},
    )

    report = FreshnessChecker(registry).check("cli")

    assert report.token == "no_outdated_deps"
    assert [check.name for check in report.checks] == ["@aiready/dep-b"]


def test_outdated_flag_matches_any_scoped_mismatch(fake_registry):
    cases = [
        ({}, {}, False),
        ({"@aiready/a": "1.0.0"}, {"@aiready/a": "1.0.0"}, False),
        ({"@aiready/a": "1.0.0"}, {"@aiready/a": "1.0.1"}, True),
        ({"@aiready/a": "2.0.0"}, {"@aiready/a": "1.0.0"}, True),
        ({"@aiready/a": "1.0.0", "@aiready/b": "1.0.0"}, {"@aiready/a": "1.0.0"}, True),
        ({"react": "18.0.0", "@other/x": "1.0.0"}, {}, False),
    ]
    for declared, current, expected in cases:
        registry = fake_registry(manifests={"@aiready/pkg": declared}, versions=current)
        report = FreshnessChecker(registry).check("pkg")
        assert report.has_outdated is expected, declared


def test_repeated_checks_are_idempotent(fake_registry):
    registry = fake_registry(
        manifests={"@aiready/cli": {"@aiready/dep-a": "1.0.0"}},
        versions={"@aiready/dep-a": "1.1.0"},
    )
    checker = FreshnessChecker(registry)

    assert checker.check("cli") == checker.check("cli")


def test_concurrent_lookups_keep_manifest_order(fake_registry):
    declared = {f"@aiready/dep-{i}": "1.0.0" for i in range(10)}
    current = {name: ("2.0.0" if i % 3 == 0 else "1.0.0") for i, name in enumerate(declared)}
    registry = fake_registry(manifests={"@aiready/cli": declared}, versions=current)

    report = FreshnessChecker(registry, jobs=4).check("cli")

    assert [check.name for check in report.checks] == list(declared)
    assert [check.name for check in report.outdated] == [
        "@aiready/dep-0", "@aiready/dep-3", "@aiready/dep-6", "@aiready/dep-9"
    ]


def test_custom_scope(fake_registry):
    registry = fake_registry(
        manifests={"@acme/web": {"@acme/ui": "1.0.0", "@aiready/core": "0.1.0"}},
        versions={"@acme/ui": "1.0.0", "@aiready/core": "0.2.0"},
    )

    report = check_package("web", registry, scope="acme")

    assert report.scope == "@acme/"
    assert report.token == "no_outdated_deps"


def test_qualify_accepts_scoped_names(fake_registry):
    checker = FreshnessChecker(fake_registry())

    assert checker.qualify("core") == "@aiready/core"
    assert checker.qualify("@aiready/core") == "@aiready/core"
    assert checker.qualify("  core ") == "@aiready/core"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_qualify_rejects_missing_names(fake_registry, name):
    checker = FreshnessChecker(fake_registry())

    with pytest.raises(ValueError):
        checker.qualify(name)


def test_invalid_jobs_rejected(fake_registry):
    with pytest.raises(ValueError):
        FreshnessChecker(fake_registry(), jobs=0)


def test_qualify_rejects_other_scopes(fake_registry):
    checker = FreshnessChecker(fake_registry())

    with pytest.raises(ValueError):
        checker.qualify("@other/x")


def test_check_package_rejects_zero_jobs(fake_registry):
    with pytest.raises(ValueError):
        check_package("cli", fake_registry(), jobs=0)
