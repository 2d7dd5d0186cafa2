"""Tabular views of rule violations shared by the text formatters."""
from __future__ import annotations

from package_auditor.models.reference import PackageReference
from package_auditor.models.report import RuleName, Violation
from package_auditor.models.violations import (
    DeprecationViolation,
    LicenseViolation,
    PinnedVersionCheck,
    VersionMismatch,
    VulnerabilityViolation,
)

_PACKAGE_COLUMNS = ["Project", "Package", "Version"]

RULE_COLUMNS: dict[RuleName, list[str]] = {
    RuleName.LICENSES: _PACKAGE_COLUMNS + ["License"],
    RuleName.VULNERABILITIES: _PACKAGE_COLUMNS + ["Vulnerabilities"],
    RuleName.DEPRECATION: _PACKAGE_COLUMNS + ["Deprecated"],
    RuleName.CONSISTENCY: ["Package", "Versions"],
    RuleName.RESTRICTED: _PACKAGE_COLUMNS,
    RuleName.PINNED: ["Pattern", "Package", "Expected", "Actual"],
}


def violation_row(violation: Violation) -> list[str]:
    """Render a violation as table cells matching RULE_COLUMNS."""
    if isinstance(violation, LicenseViolation):
        return _package_cells(violation) + [violation.observed_license or "(none)"]
    if isinstance(violation, VulnerabilityViolation):
        advisories = ", ".join(
            f"{v.severity.value}: {v.advisory_url}" for v in violation.vulnerabilities
        )
        return _package_cells(violation) + [advisories]
    if isinstance(violation, DeprecationViolation):
        return _package_cells(violation) + ["yes" if violation.is_deprecated else "tagged only"]
    if isinstance(violation, VersionMismatch):
        return [violation.package_id, "; ".join(violation.versions)]
    if isinstance(violation, PinnedVersionCheck):
        actual = "(not referenced)" if violation.is_missing else str(violation.actual_version)
        return [violation.pattern, violation.package_id, violation.expected_version, actual]
    return _package_cells(violation)


def _package_cells(
    violation: LicenseViolation | VulnerabilityViolation | DeprecationViolation | PackageReference,
) -> list[str]:
    return [violation.project, violation.package_id, violation.version]
