"""Registry metadata models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class VulnerabilitySeverity(Enum):
    """Advisory severity as reported by the registry."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"
    UNKNOWN = "unknown"

    @classmethod
    def from_registry(cls, value: object) -> VulnerabilitySeverity:
        """Map a NuGet severity (0-3, numeric or string) to the enum.

        Args:
            value: Raw severity value from a catalog entry.

        Returns:
            Matching severity, or UNKNOWN for anything unrecognized.
        """
        by_index = [cls.LOW, cls.MODERATE, cls.HIGH, cls.CRITICAL]
        try:
            index = int(str(value))
        except ValueError:
            try:
                return cls(str(value).lower())
            except ValueError:
                return cls.UNKNOWN
        if 0 <= index < len(by_index):
            return by_index[index]
        return cls.UNKNOWN


class VulnerabilityRecord(BaseModel):
    """A known vulnerability advisory for a package version."""

    model_config = {"extra": "forbid", "frozen": True}

    severity: VulnerabilitySeverity = Field(description="Advisory severity")
    advisory_url: str = Field(description="Link to the advisory")


class PackageMetadata(BaseModel):
    """Metadata for one package version as published in the registry.

    Every optional field defaults to empty so that absent data never
    triggers a rule on its own.
    """

    model_config = {"extra": "forbid"}

    package_id: str = Field(description="Package identifier")
    version: str = Field(description="Package version")
    license_expression: Optional[str] = Field(
        default=None,
        description="SPDX license expression (None if not published)",
    )
    authors: str = Field(default="", description="Authors string")
    vulnerabilities: list[VulnerabilityRecord] = Field(
        default_factory=list,
        description="Known vulnerabilities in registry order",
    )
    tags: str = Field(default="", description="Tags string")
    deprecation_reasons: list[str] = Field(
        default_factory=list,
        description="Deprecation reasons (empty if not deprecated)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def observed_license(self) -> str:
        """License expression, falling back to authors when not published."""
        if self.license_expression is None:
            return self.authors
        return self.license_expression
