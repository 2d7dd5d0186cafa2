"""Custom exceptions for package-auditor."""


class PackageAuditorError(Exception):
    """Base exception for all package-auditor errors."""

    pass


class NetworkError(PackageAuditorError):
    """Exception raised when a network request fails."""

    pass


class ConfigurationError(PackageAuditorError):
    """Exception raised when configuration is invalid."""

    pass


class ScanError(PackageAuditorError):
    """Exception raised when manifest discovery fails."""

    pass


class ManifestError(ScanError):
    """Exception raised when a manifest file cannot be read or parsed."""

    pass


class RegistryError(PackageAuditorError):
    """Exception raised when the registry returns an unusable response."""

    pass


class PackageNotFoundError(RegistryError):
    """Exception raised when a package id/version pair is not in the registry."""

    def __init__(self, package_id: str, version: str) -> None:
        super().__init__(f"Package '{package_id}' version '{version}' not found")
        self.package_id = package_id
        self.version = version


class VersionParseError(PackageAuditorError):
    """Exception raised when a version string is not a valid NuGet version."""

    def __init__(self, version: str) -> None:
        super().__init__(f"'{version}' is not a valid version string")
        self.version = version
