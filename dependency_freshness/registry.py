"""
Registry backends for looking up published manifests and versions.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT, FreshnessConfig
from .interfaces import RegistryClient


logger = logging.getLogger(__name__)

# Abbreviated packument: dist-tags plus per-version dependencies, without readmes.
ABBREVIATED_METADATA = "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8"


class NpmCliRegistry(RegistryClient):
    """Registry lookups through the ``npm view`` command.

    The npm CLI resolves the registry URL and credentials from its own
    configuration, so nothing beyond the package identifier is passed along.
    """

    name = "npm"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, npm_command: str = "npm") -> None:
        self.timeout = timeout
        self.npm_command = npm_command

    def get_dependencies(self, package: str) -> Optional[Dict[str, Any]]:
        output = self._npm_view([package, 'dependencies', '--json'])
        if output is None:
            return None
        # npm prints nothing when the field is absent from the manifest
        if not output:
            return {}

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            logger.warning("Unparseable dependencies for %s: %s", package, e)
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected dependencies value for %s: %r", package, data)
            return None
        return data

    def get_latest_version(self, package: str) -> Optional[str]:
        output = self._npm_view([package, 'version'])
        if not output:
            return None
        return output

    def _npm_view(self, args: List[str]) -> Optional[str]:
        cmd = [self.npm_command, 'view', *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.warning("npm view failed for %s: %s", args[0], e)
            return None

        if result.returncode != 0:
            logger.debug(
                "npm view %s exited with %s: %s",
                " ".join(args), result.returncode, result.stderr.strip()
            )
            return None
        return result.stdout.strip()


class HttpRegistry(RegistryClient):
    """Registry lookups against the npm registry HTTP API."""

    name = "http"

    def __init__(
        self,
        registry_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Accept"] = ABBREVIATED_METADATA
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self._metadata_cache: Dict[str, Optional[Dict]] = {}

    def package_url(self, package: str) -> str:
        # Scoped names keep the "@" but escape the "/" between scope and name.
        return f"{self.registry_url}/{quote(package, safe='@')}"

    def fetch_package_metadata(self, package: str) -> Optional[Dict]:
        if package in self._metadata_cache:
            logger.debug("Cache hit: metadata %s", package)
            return self._metadata_cache[package]

        url = self.package_url(package)
        logger.info("Fetching metadata for %s", package)
        data = None
        try:
            with self.session.get(url, timeout=self.timeout) as response:
                response.raise_for_status()
                data = response.json()
        except requests.RequestException as e:
            logger.warning("Registry request failed for %s: %s", package, e)
        except ValueError as e:
            logger.warning("Unparseable registry response for %s: %s", package, e)

        if data is not None and not isinstance(data, dict):
            logger.warning("Unexpected registry response for %s", package)
            data = None
        self._metadata_cache[package] = data
        return data

    def _latest_tag(self, metadata: Dict) -> Optional[str]:
        dist_tags = metadata.get('dist-tags')
        if not isinstance(dist_tags, dict):
            return None
        latest = dist_tags.get('latest')
        if not isinstance(latest, str) or not latest:
            return None
        return latest

    def get_latest_manifest(self, package: str) -> Optional[Dict]:
        metadata = self.fetch_package_metadata(package)
        if metadata is None:
            return None
        latest = self._latest_tag(metadata)
        if latest is None:
            logger.debug("No latest dist-tag for %s", package)
            return None
        versions = metadata.get('versions')
        if not isinstance(versions, dict):
            logger.debug("No versions listed for %s", package)
            return None
        manifest = versions.get(latest)
        if not isinstance(manifest, dict):
            return None
        return manifest

    def get_dependencies(self, package: str) -> Optional[Dict[str, Any]]:
        manifest = self.get_latest_manifest(package)
        if manifest is None:
            return None
        dependencies = manifest.get('dependencies', {})
        if not isinstance(dependencies, dict):
            logger.warning("Unexpected dependencies value for %s: %r", package, dependencies)
            return None
        return dependencies

    def get_latest_version(self, package: str) -> Optional[str]:
        metadata = self.fetch_package_metadata(package)
        if metadata is None:
            return None
        return self._latest_tag(metadata)


def build_registry(config: FreshnessConfig) -> RegistryClient:
    """Create the registry backend named in the config."""
    if config.registry == NpmCliRegistry.name:
        return NpmCliRegistry(timeout=config.timeout)
    if config.registry == HttpRegistry.name:
        return HttpRegistry(
            registry_url=config.registry_url,
            timeout=config.timeout,
            token=config.token,
        )
    raise ValueError(f"Unsupported registry backend: {config.registry}")
