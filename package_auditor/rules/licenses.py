"""License compliance rule."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from package_auditor.constants import DEFAULT_ALLOWED_LICENSES, DEFAULT_MANIFEST_PATTERN
from package_auditor.manifest import list_manifests, list_references
from package_auditor.models.violations import LicenseViolation
from package_auditor.registry.base import BaseRegistryClient

logger = logging.getLogger(__name__)


async def check_package_licenses(
    solution_root: Path,
    client: BaseRegistryClient,
    allowed_licenses: Optional[Iterable[str]] = None,
    manifest_pattern: str = DEFAULT_MANIFEST_PATTERN,
) -> list[LicenseViolation]:
    """Check every declared package against the allowed licenses.

    The observed license is the published license expression or, for
    packages without one, the authors string. Membership is an exact,
    case-sensitive match, so a package authored by "Microsoft" passes
    when "Microsoft" is allowed.

    Args:
        solution_root: Solution directory to scan.
        client: Registry client used for one lookup per reference.
        allowed_licenses: Allowed tokens. Defaults to MIT, Apache-2.0
            and Microsoft.
        manifest_pattern: Filename pattern of project manifests.

    Returns:
        One violation per reference whose observed license is not allowed.

    Raises:
        PackageAuditorError: Any manifest or registry failure aborts the rule.
    """
    allowed = set(DEFAULT_ALLOWED_LICENSES if allowed_licenses is None else allowed_licenses)
    violations: list[LicenseViolation] = []

    for manifest in list_manifests(solution_root, manifest_pattern):
        for reference in list_references(manifest):
            metadata = await client.get_metadata(reference.package_id, reference.version)
            observed = metadata.observed_license

            if observed in allowed:
                continue
            violations.append(
                LicenseViolation(
                    **LicenseViolation.reference_fields(reference),
                    observed_license=observed,
                )
            )

    logger.debug("License rule found %d violation(s)", len(violations))
    return violations
