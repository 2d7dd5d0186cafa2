"""Configuration Pydantic models for package-auditor."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from package_auditor.constants import (
    DEFAULT_MANIFEST_PATTERN,
    NUGET_SERVICE_INDEX_URL,
)


class RestrictedProjects(BaseModel):
    """Projects that must not declare any package references."""

    model_config = {"extra": "forbid"}

    pattern: str = Field(description="Manifest filename pattern, e.g. '*Domain.csproj'")


class PinnedPackage(BaseModel):
    """A package that must be referenced with an exact version."""

    model_config = {"extra": "forbid"}

    pattern: str = Field(description="Manifest filename pattern to search")
    package_id: str = Field(description="Package identifier to look up")
    version: str = Field(description="Required version")


class AuditorConfig(BaseModel):
    """Configuration for package-auditor.

    Fields left as None fall back to built-in defaults when rules run.
    """

    model_config = {"extra": "forbid"}

    allowed_licenses: Optional[List[str]] = Field(
        default=None,
        description="Allowed license expressions (or author names for "
        "packages without license metadata).",
    )
    manifest_pattern: str = Field(
        default=DEFAULT_MANIFEST_PATTERN,
        description="Filename pattern of project manifests.",
    )
    registry_url: str = Field(
        default=NUGET_SERVICE_INDEX_URL,
        description="NuGet V3 service index URL.",
    )
    restricted_projects: List[RestrictedProjects] = Field(
        default_factory=list,
        description="Project categories that must have no package references.",
    )
    pinned_packages: List[PinnedPackage] = Field(
        default_factory=list,
        description="Packages that must be referenced with an exact version.",
    )
