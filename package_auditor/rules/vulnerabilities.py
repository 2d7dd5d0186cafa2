"""Known vulnerability rule."""
from __future__ import annotations

import logging
from pathlib import Path

from package_auditor.constants import DEFAULT_MANIFEST_PATTERN
from package_auditor.manifest import list_manifests, list_references
from package_auditor.models.violations import VulnerabilityViolation
from package_auditor.registry.base import BaseRegistryClient

logger = logging.getLogger(__name__)


async def check_package_vulnerabilities(
    solution_root: Path,
    client: BaseRegistryClient,
    manifest_pattern: str = DEFAULT_MANIFEST_PATTERN,
) -> list[VulnerabilityViolation]:
    """Report every declared package version with known vulnerabilities.

    Any advisory counts regardless of severity.

    Args:
        solution_root: Solution directory to scan.
        client: Registry client used for one lookup per reference.
        manifest_pattern: Filename pattern of project manifests.

    Returns:
        One violation per vulnerable reference, carrying all advisories.
    """
    violations: list[VulnerabilityViolation] = []

    for manifest in list_manifests(solution_root, manifest_pattern):
        for reference in list_references(manifest):
            metadata = await client.get_metadata(reference.package_id, reference.version)

            if not metadata.vulnerabilities:
                continue
            violations.append(
                VulnerabilityViolation(
                    **VulnerabilityViolation.reference_fields(reference),
                    vulnerabilities=list(metadata.vulnerabilities),
                )
            )

    logger.debug("Vulnerability rule found %d violation(s)", len(violations))
    return violations
