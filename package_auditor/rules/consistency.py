"""Cross-project version consistency rule."""
from __future__ import annotations

from pathlib import Path

from package_auditor.constants import DEFAULT_MANIFEST_PATTERN
from package_auditor.manifest import collect_references
from package_auditor.models.reference import PackageReference
from package_auditor.models.violations import VersionMismatch


def find_version_mismatches(references: list[PackageReference]) -> list[VersionMismatch]:
    """Find packages referenced with more than one version.

    Package ids are grouped by exact, case-sensitive match. Groups keep
    first-seen order and every reference in a mismatched group is listed.

    Args:
        references: References in discovery order.

    Returns:
        One VersionMismatch per package with differing versions.
    """
    groups: dict[str, list[PackageReference]] = {}
    for reference in references:
        groups.setdefault(reference.package_id, []).append(reference)

    return [
        VersionMismatch(
            package_id=package_id,
            versions=[f"{ref.project}: {ref.version}" for ref in group],
        )
        for package_id, group in groups.items()
        if len({ref.version for ref in group}) > 1
    ]


def check_version_mismatches(
    solution_root: Path,
    manifest_pattern: str = DEFAULT_MANIFEST_PATTERN,
) -> list[VersionMismatch]:
    """Report packages that should be consolidated to a single version.

    Args:
        solution_root: Solution directory to scan.
        manifest_pattern: Filename pattern of project manifests.

    Returns:
        Consolidation candidates; empty if all projects agree.
    """
    return find_version_mismatches(collect_references(solution_root, manifest_pattern))
