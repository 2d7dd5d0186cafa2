"""Base registry client interface."""

from abc import ABC, abstractmethod

from package_auditor.models.metadata import PackageMetadata


class BaseRegistryClient(ABC):
    """Abstract base class for package registry clients.

    Implementations perform exactly one lookup per call and never cache
    results between calls.
    """

    @abstractmethod
    async def get_metadata(self, package_id: str, version: str) -> PackageMetadata:
        """Fetch metadata for an exact package version.

        Args:
            package_id: The package identifier.
            version: The exact package version.

        Returns:
            PackageMetadata for the requested version.

        Raises:
            VersionParseError: If version is not a valid version string.
            PackageNotFoundError: If the id/version pair is not published.
            NetworkError: If a network request fails.
        """

    async def get_deprecation_reasons(self, package_id: str, version: str) -> list[str]:
        """Fetch deprecation reasons for an exact package version.

        Args:
            package_id: The package identifier.
            version: The exact package version.

        Returns:
            Deprecation reasons, empty if the version is not deprecated.
        """
        metadata = await self.get_metadata(package_id, version)
        return list(metadata.deprecation_reasons)
