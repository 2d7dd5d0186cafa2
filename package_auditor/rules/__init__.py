"""Dependency policy rules for package-auditor."""
from package_auditor.rules.boundaries import (
    check_no_packages,
    check_pinned_version,
    check_restricted_projects,
    find_pinned_version,
    find_references,
)
from package_auditor.rules.consistency import (
    check_version_mismatches,
    find_version_mismatches,
)
from package_auditor.rules.deprecation import check_deprecated_packages
from package_auditor.rules.licenses import check_package_licenses
from package_auditor.rules.vulnerabilities import check_package_vulnerabilities

__all__ = [
    "check_deprecated_packages",
    "check_no_packages",
    "check_package_licenses",
    "check_package_vulnerabilities",
    "check_pinned_version",
    "check_restricted_projects",
    "check_version_mismatches",
    "find_pinned_version",
    "find_references",
    "find_version_mismatches",
]
