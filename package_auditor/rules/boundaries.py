"""Rules restricting the dependencies of selected project categories.

Projects are selected by manifest filename pattern, for example
"*Domain.csproj" for domain projects.
"""
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from package_auditor.manifest import collect_references, list_manifests, list_references
from package_auditor.models.reference import PackageReference
from package_auditor.models.violations import PinnedVersionCheck


def find_references(solution_root: Path, pattern: str) -> list[PackageReference]:
    """All package references of manifests matching pattern."""
    return collect_references(solution_root, pattern)


def check_no_packages(solution_root: Path, pattern: str) -> list[PackageReference]:
    """Report package references declared by restricted projects.

    Args:
        solution_root: Solution directory to scan.
        pattern: Filename pattern selecting restricted manifests.

    Returns:
        Every reference found; empty if no matching project declares one.
    """
    return find_references(solution_root, pattern)


def check_restricted_projects(
    solution_root: Path, patterns: Iterable[str]
) -> list[PackageReference]:
    """Report package references declared by projects matching any pattern.

    A manifest matched by several overlapping patterns is read once.

    Args:
        solution_root: Solution directory to scan.
        patterns: Filename patterns selecting restricted manifests.

    Returns:
        Every reference found, in manifest path order.
    """
    manifests = sorted(
        {
            manifest
            for pattern in patterns
            for manifest in list_manifests(solution_root, pattern)
        }
    )
    return [
        reference
        for manifest in manifests
        for reference in list_references(manifest)
    ]


def find_pinned_version(
    solution_root: Path, pattern: str, package_id: str
) -> Optional[str]:
    """Version of the first reference to package_id, or None if absent."""
    for reference in find_references(solution_root, pattern):
        if reference.package_id == package_id:
            return reference.version
    return None


def check_pinned_version(
    solution_root: Path,
    pattern: str,
    package_id: str,
    expected_version: str,
) -> PinnedVersionCheck:
    """Check that matching projects reference a package at an exact version.

    Only the first reference found is compared, as a literal string.

    Args:
        solution_root: Solution directory to scan.
        pattern: Filename pattern selecting manifests to search.
        package_id: Package identifier (exact match).
        expected_version: Required version string.

    Returns:
        PinnedVersionCheck with the actual version (None if not referenced).
    """
    return PinnedVersionCheck(
        pattern=pattern,
        package_id=package_id,
        expected_version=expected_version,
        actual_version=find_pinned_version(solution_root, pattern, package_id),
    )
