"""NuGet V3 registry client."""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from package_auditor.constants import NUGET_SERVICE_INDEX_URL
from package_auditor.exceptions import (
    NetworkError,
    PackageNotFoundError,
    RegistryError,
    VersionParseError,
)
from package_auditor.models.metadata import (
    PackageMetadata,
    VulnerabilityRecord,
    VulnerabilitySeverity,
)
from package_auditor.registry.base import BaseRegistryClient
from package_auditor.versioning import NuGetVersion, parse_version, versions_equal

logger = logging.getLogger(__name__)

# Registration resource types, most capable first
REGISTRATION_RESOURCE_TYPES = [
    "RegistrationsBaseUrl/3.6.0",
    "RegistrationsBaseUrl/3.4.0",
    "RegistrationsBaseUrl/3.0.0-rc",
    "RegistrationsBaseUrl/3.0.0-beta",
    "RegistrationsBaseUrl",
]

REQUEST_TIMEOUT = 30.0


async def fetch_json(client: httpx.AsyncClient, url: str) -> Optional[Any]:
    """Fetch and decode a JSON document.

    Args:
        client: httpx.AsyncClient to use.
        url: Document URL.

    Returns:
        Decoded JSON, or None if the server answered 404.

    Raises:
        NetworkError: If the request fails or returns an error status.
        RegistryError: If the body is not valid JSON.
    """
    try:
        response = await client.get(url, timeout=httpx.Timeout(REQUEST_TIMEOUT))
        if response.status_code == 404:
            return None
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(f"Registry request to {url} failed: {e}") from e
    except httpx.RequestError as e:
        raise NetworkError(f"Failed to fetch {url}: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise RegistryError(f"Invalid JSON from {url}: {e}") from e


def _join_field(value: Any) -> str:
    """Flatten a catalog field that may be a string or a list of strings."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def extract_metadata_from_catalog_entry(
    entry: dict[str, Any], package_id: str, version: str
) -> PackageMetadata:
    """Build PackageMetadata from a registration catalog entry.

    Absent or empty fields map to empty defaults. An empty license
    expression is treated as not published.

    Args:
        entry: The catalogEntry object of a registration leaf.
        package_id: Requested package identifier.
        version: Requested version string.

    Returns:
        PackageMetadata for the entry.
    """
    vulnerabilities = [
        VulnerabilityRecord(
            severity=VulnerabilitySeverity.from_registry(item.get("severity")),
            advisory_url=str(item.get("advisoryUrl", "")),
        )
        for item in entry.get("vulnerabilities") or []
    ]

    deprecation: dict[str, Any] = entry.get("deprecation") or {}
    reasons = [str(reason) for reason in deprecation.get("reasons") or []]

    return PackageMetadata(
        package_id=str(entry.get("id", package_id)),
        version=version,
        license_expression=entry.get("licenseExpression") or None,
        authors=_join_field(entry.get("authors")),
        vulnerabilities=vulnerabilities,
        tags=_join_field(entry.get("tags")),
        deprecation_reasons=reasons,
    )


def _entry_version_matches(entry: dict[str, Any], target: NuGetVersion) -> bool:
    try:
        return versions_equal(str(entry.get("version", "")), target.normalized)
    except VersionParseError:
        return False


def page_may_contain(page: dict[str, Any], target: NuGetVersion) -> bool:
    """Check whether a registration page's version range covers target.

    Pages without usable lower/upper bounds are assumed to match.
    """
    try:
        lower = parse_version(str(page["lower"]))
        upper = parse_version(str(page["upper"]))
    except (KeyError, VersionParseError):
        return True
    return lower.sort_key <= target.sort_key <= upper.sort_key


def _expect_object(document: Any, description: str) -> dict[str, Any]:
    if not isinstance(document, dict):
        raise RegistryError(
            f"Unexpected {description}: expected an object, got {type(document).__name__}"
        )
    return document


def _expect_list(value: Any, description: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise RegistryError(
            f"Unexpected {description}: expected a list, got {type(value).__name__}"
        )
    return value


class NuGetRegistryClient(BaseRegistryClient):
    """Registry client for NuGet V3 feeds.

    Metadata is read from the registration resource advertised by the
    feed's service index.
    """

    def __init__(
        self,
        service_index_url: str = NUGET_SERVICE_INDEX_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            service_index_url: URL of the feed's V3 service index.
            client: Optional shared httpx.AsyncClient. If not provided,
                a new client is opened and closed for every lookup.
        """
        self._service_index_url = service_index_url
        self._client = client
        self._registration_base_url: Optional[str] = None

    async def get_metadata(self, package_id: str, version: str) -> PackageMetadata:
        """Fetch metadata for an exact package version from the feed.

        Raises:
            VersionParseError: If version is not a valid version string.
            PackageNotFoundError: If the id/version pair is not published.
            NetworkError: If a network request fails.
            RegistryError: If the feed returns an unexpected document.
        """
        target = parse_version(version)
        logger.debug("Fetching metadata for %s %s", package_id, target)

        if self._client:
            return await self._lookup(self._client, package_id, version, target)

        async with httpx.AsyncClient() as new_client:
            return await self._lookup(new_client, package_id, version, target)

    async def _lookup(
        self,
        client: httpx.AsyncClient,
        package_id: str,
        version: str,
        target: NuGetVersion,
    ) -> PackageMetadata:
        if not package_id.strip():
            raise PackageNotFoundError(package_id, version)

        base_url = await self._get_registration_base_url(client)
        index_url = f"{base_url}{package_id.lower()}/index.json"
        index = await fetch_json(client, index_url)
        if index is None:
            raise PackageNotFoundError(package_id, version)

        index = _expect_object(index, f"registration index {index_url}")
        entry = await self._find_catalog_entry(client, index, target)
        if entry is None:
            raise PackageNotFoundError(package_id, version)

        return extract_metadata_from_catalog_entry(entry, package_id, version)

    async def _get_registration_base_url(self, client: httpx.AsyncClient) -> str:
        """Resolve the registration base URL from the service index."""
        if self._registration_base_url is not None:
            return self._registration_base_url

        service_index = await fetch_json(client, self._service_index_url)
        if service_index is None:
            raise RegistryError(
                f"Service index not available at {self._service_index_url}"
            )
        service_index = _expect_object(
            service_index, f"service index {self._service_index_url}"
        )

        resources = [
            resource
            for resource in _expect_list(
                service_index.get("resources"), "service index resources"
            )
            if isinstance(resource, dict)
        ]
        for resource_type in REGISTRATION_RESOURCE_TYPES:
            for resource in resources:
                if resource.get("@type") == resource_type and resource.get("@id"):
                    url = str(resource["@id"])
                    self._registration_base_url = url if url.endswith("/") else url + "/"
                    return self._registration_base_url

        raise RegistryError(
            f"No registration resource in service index {self._service_index_url}"
        )

    async def _find_catalog_entry(
        self,
        client: httpx.AsyncClient,
        index: dict[str, Any],
        target: NuGetVersion,
    ) -> Optional[dict[str, Any]]:
        """Find the catalog entry for a version in a registration index.

        Pages whose version range excludes the target are skipped. Pages
        whose leaves are not inlined are fetched one at a time.
        """
        for page in _expect_list(index.get("items"), "registration index items"):
            page = _expect_object(page, "registration page")
            if not page_may_contain(page, target):
                continue

            leaves = page.get("items")
            if leaves is None:
                page_url = str(page.get("@id", ""))
                page_doc = await fetch_json(client, page_url)
                if page_doc is None:
                    raise RegistryError(f"Registration page {page_url} not available")
                leaves = _expect_object(page_doc, f"registration page {page_url}").get("items")

            for leaf in _expect_list(leaves, "registration page items"):
                entry = _expect_object(leaf, "registration leaf").get("catalogEntry")
                if isinstance(entry, str):
                    entry = await fetch_json(client, entry)
                if isinstance(entry, dict) and _entry_version_matches(entry, target):
                    return entry

        return None
