from typing import Dict, Optional

import pytest


class FakeRegistry:
    """In-memory registry keyed by scoped package identifier."""

    def __init__(self, manifests: Optional[Dict] = None, versions: Optional[Dict] = None) -> None:
        self.manifests = manifests or {}
        self.versions = versions or {}
        self.calls = []

    def get_dependencies(self, package):
        self.calls.append(("dependencies", package))
        return self.manifests.get(package)

    def get_latest_version(self, package):
        self.calls.append(("version", package))
        return self.versions.get(package)


@pytest.fixture
def fake_registry():
    return FakeRegistry
