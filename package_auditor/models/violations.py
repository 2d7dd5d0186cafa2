"""Policy violation models, one shape per rule."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from package_auditor.models.metadata import VulnerabilityRecord
from package_auditor.models.reference import PackageReference


class PackageViolation(BaseModel):
    """Common fields of a violation tied to a single package reference."""

    model_config = {"extra": "forbid"}

    project: str = Field(description="Project declaring the package")
    package_id: str = Field(description="Package identifier")
    version: str = Field(description="Declared version")

    @classmethod
    def reference_fields(cls, reference: PackageReference) -> dict[str, str]:
        """Return the reference fields shared by every violation."""
        return {
            "project": reference.project,
            "package_id": reference.package_id,
            "version": reference.version,
        }


class LicenseViolation(PackageViolation):
    """A package whose license is not in the allowed set."""

    observed_license: str = Field(
        description="License expression, or authors when no license is published"
    )


class VulnerabilityViolation(PackageViolation):
    """A package version with known vulnerabilities."""

    vulnerabilities: list[VulnerabilityRecord] = Field(
        description="All advisories reported for this version"
    )


class DeprecationViolation(PackageViolation):
    """A package version tagged as deprecated."""

    is_deprecated: bool = Field(
        description="True if the registry lists deprecation reasons"
    )


class VersionMismatch(BaseModel):
    """A package referenced with more than one version across the solution."""

    model_config = {"extra": "forbid"}

    package_id: str = Field(description="Package identifier")
    versions: list[str] = Field(
        description="'project: version' entries in discovery order"
    )


class PinnedVersionCheck(BaseModel):
    """Outcome of checking a package against its required version.

    ``actual_version`` is None when no matching reference exists, which
    is reported separately from a reference with the wrong version.
    """

    model_config = {"extra": "forbid"}

    pattern: str = Field(description="Manifest filename pattern checked")
    package_id: str = Field(description="Package identifier")
    expected_version: str = Field(description="Required version")
    actual_version: Optional[str] = Field(
        default=None,
        description="Version of the first matching reference (None if absent)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_missing(self) -> bool:
        """True if no manifest references the package."""
        return self.actual_version is None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        """True if the referenced version equals the expected one."""
        return self.actual_version == self.expected_version
