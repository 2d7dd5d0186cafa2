"""Package registry clients."""

from package_auditor.registry.base import BaseRegistryClient
from package_auditor.registry.nuget import NuGetRegistryClient

__all__ = [
    "BaseRegistryClient",
    "NuGetRegistryClient",
]
