"""Audit result models."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field, computed_field

from package_auditor.models.reference import PackageReference
from package_auditor.models.violations import (
    DeprecationViolation,
    LicenseViolation,
    PinnedVersionCheck,
    VersionMismatch,
    VulnerabilityViolation,
)

Violation = Union[
    LicenseViolation,
    VulnerabilityViolation,
    DeprecationViolation,
    VersionMismatch,
    PinnedVersionCheck,
    PackageReference,
]


class RuleName(Enum):
    """Policy rules in the order they are run."""

    LICENSES = "licenses"
    VULNERABILITIES = "vulnerabilities"
    DEPRECATION = "deprecation"
    CONSISTENCY = "consistency"
    RESTRICTED = "restricted"
    PINNED = "pinned"

    @property
    def title(self) -> str:
        """Human readable rule title."""
        return _RULE_TITLES[self]


_RULE_TITLES = {
    RuleName.LICENSES: "License Compliance",
    RuleName.VULNERABILITIES: "Known Vulnerabilities",
    RuleName.DEPRECATION: "Deprecated Packages",
    RuleName.CONSISTENCY: "Version Consistency",
    RuleName.RESTRICTED: "Restricted Projects",
    RuleName.PINNED: "Pinned Versions",
}


class RuleResult(BaseModel):
    """Violations produced by a single rule invocation."""

    model_config = {"extra": "forbid"}

    rule: RuleName = Field(description="Rule that produced the violations")
    violations: list[Violation] = Field(
        default_factory=list,
        description="Violations in discovery order",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        """True if the rule produced no violations."""
        return len(self.violations) == 0


class AuditReport(BaseModel):
    """Combined results of an audit run."""

    model_config = {"extra": "forbid"}

    solution_root: str = Field(description="Solution directory that was audited")
    manifests_scanned: int = Field(default=0, description="Number of manifests found")
    references_found: int = Field(default=0, description="Number of package references")
    results: list[RuleResult] = Field(
        default_factory=list,
        description="Per-rule results in run order",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_violations(self) -> bool:
        """True if any rule failed."""
        return any(not result.passed for result in self.results)

    @property
    def violation_count(self) -> int:
        """Total number of violations across all rules."""
        return sum(len(result.violations) for result in self.results)

    def get_result(self, rule: RuleName) -> RuleResult | None:
        """Return the result for a rule, or None if it was not run."""
        for result in self.results:
            if result.rule == rule:
                return result
        return None
