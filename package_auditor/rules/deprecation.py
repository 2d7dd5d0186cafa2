"""Deprecated package rule."""
from __future__ import annotations

import logging
from pathlib import Path

from package_auditor.constants import DEFAULT_MANIFEST_PATTERN, DEPRECATED_TAG
from package_auditor.manifest import list_manifests, list_references
from package_auditor.models.violations import DeprecationViolation
from package_auditor.registry.base import BaseRegistryClient

logger = logging.getLogger(__name__)


async def check_deprecated_packages(
    solution_root: Path,
    client: BaseRegistryClient,
    manifest_pattern: str = DEFAULT_MANIFEST_PATTERN,
) -> list[DeprecationViolation]:
    """Report declared packages tagged as deprecated.

    Only packages whose tags contain "Deprecated" (case-sensitive) are
    reported; for those, deprecation reasons are looked up separately and
    is_deprecated records whether any were found. A package deprecated
    in the registry without that tag is not reported.

    Args:
        solution_root: Solution directory to scan.
        client: Registry client used for the lookups.
        manifest_pattern: Filename pattern of project manifests.

    Returns:
        One violation per reference tagged as deprecated.
    """
    violations: list[DeprecationViolation] = []

    for manifest in list_manifests(solution_root, manifest_pattern):
        for reference in list_references(manifest):
            metadata = await client.get_metadata(reference.package_id, reference.version)

            if DEPRECATED_TAG not in metadata.tags:
                continue
            reasons = await client.get_deprecation_reasons(
                reference.package_id, reference.version
            )
            violations.append(
                DeprecationViolation(
                    **DeprecationViolation.reference_fields(reference),
                    is_deprecated=len(reasons) > 0,
                )
            )

    logger.debug("Deprecation rule found %d violation(s)", len(violations))
    return violations
