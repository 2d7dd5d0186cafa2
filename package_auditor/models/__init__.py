"""Pydantic data models for package-auditor."""

from package_auditor.models.config import (
    AuditorConfig,
    PinnedPackage,
    RestrictedProjects,
)
from package_auditor.models.metadata import (
    PackageMetadata,
    VulnerabilityRecord,
    VulnerabilitySeverity,
)
from package_auditor.models.reference import PackageReference
from package_auditor.models.report import AuditReport, RuleName, RuleResult
from package_auditor.models.violations import (
    DeprecationViolation,
    LicenseViolation,
    PinnedVersionCheck,
    VersionMismatch,
    VulnerabilityViolation,
)

__all__ = [
    "AuditReport",
    "AuditorConfig",
    "DeprecationViolation",
    "LicenseViolation",
    "PackageMetadata",
    "PackageReference",
    "PinnedPackage",
    "PinnedVersionCheck",
    "RestrictedProjects",
    "RuleName",
    "RuleResult",
    "VersionMismatch",
    "VulnerabilityRecord",
    "VulnerabilitySeverity",
    "VulnerabilityViolation",
]
