"""Audit orchestration: run policy rules against a solution."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from package_auditor.manifest import list_manifests, list_references
from package_auditor.models.config import AuditorConfig
from package_auditor.models.report import (
    AuditReport,
    RuleName,
    RuleResult,
    Violation,
)
from package_auditor.registry.base import BaseRegistryClient
from package_auditor.rules.boundaries import check_pinned_version, check_restricted_projects
from package_auditor.rules.consistency import check_version_mismatches
from package_auditor.rules.deprecation import check_deprecated_packages
from package_auditor.rules.licenses import check_package_licenses
from package_auditor.rules.vulnerabilities import check_package_vulnerabilities

logger = logging.getLogger(__name__)


async def run_rule(
    rule: RuleName,
    solution_root: Path,
    config: AuditorConfig,
    client: BaseRegistryClient,
) -> RuleResult:
    """Run a single policy rule.

    Args:
        rule: Rule to run.
        solution_root: Solution directory to audit.
        config: Auditor configuration.
        client: Registry client for rules that need metadata.

    Returns:
        RuleResult with the rule's violations.

    Raises:
        PackageAuditorError: Any failure aborts the rule without partial results.
    """
    logger.debug("Running %s rule on %s", rule.value, solution_root)
    pattern = config.manifest_pattern
    violations: Sequence[Violation]

    if rule == RuleName.LICENSES:
        violations = await check_package_licenses(
            solution_root, client, config.allowed_licenses, pattern
        )
    elif rule == RuleName.VULNERABILITIES:
        violations = await check_package_vulnerabilities(solution_root, client, pattern)
    elif rule == RuleName.DEPRECATION:
        violations = await check_deprecated_packages(solution_root, client, pattern)
    elif rule == RuleName.CONSISTENCY:
        violations = check_version_mismatches(solution_root, pattern)
    elif rule == RuleName.RESTRICTED:
        violations = check_restricted_projects(
            solution_root, [restricted.pattern for restricted in config.restricted_projects]
        )
    else:  # pinned
        checks = [
            check_pinned_version(
                solution_root, pinned.pattern, pinned.package_id, pinned.version
            )
            for pinned in config.pinned_packages
        ]
        violations = [check for check in checks if not check.passed]

    return RuleResult(rule=rule, violations=list(violations))


async def run_audit(
    solution_root: Path,
    config: AuditorConfig,
    client: BaseRegistryClient,
    rules: Optional[Sequence[RuleName]] = None,
) -> AuditReport:
    """Run policy rules one after another and collect their results.

    Args:
        solution_root: Solution directory to audit.
        config: Auditor configuration.
        client: Registry client for rules that need metadata.
        rules: Rules to run. Defaults to all rules, in RuleName order.

    Returns:
        AuditReport with one RuleResult per rule run.
    """
    selected = set(rules) if rules is not None else set(RuleName)

    manifests = list_manifests(solution_root, config.manifest_pattern)
    references_found = sum(len(list_references(manifest)) for manifest in manifests)

    results: list[RuleResult] = []
    for rule in RuleName:
        if rule not in selected:
            continue
        results.append(await run_rule(rule, solution_root, config, client))

    report = AuditReport(
        solution_root=str(solution_root),
        manifests_scanned=len(manifests),
        references_found=references_found,
        results=results,
    )
    logger.debug(
        "Audit finished: %d rule(s), %d violation(s)",
        len(results),
        report.violation_count,
    )
    return report
