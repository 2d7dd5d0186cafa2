"""Package reference model extracted from project manifests."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PackageReference(BaseModel):
    """A single declared dependency of a project.

    Missing manifest attributes are kept as empty strings so that rules
    which need them fail on lookup rather than silently skipping.
    """

    model_config = {"extra": "forbid", "frozen": True}

    project: str = Field(description="Project name (manifest filename without extension)")
    package_id: str = Field(default="", description="Package identifier (Include)")
    version: str = Field(default="", description="Declared version (Version)")

    def __str__(self) -> str:
        return f"{self.project}: {self.package_id}@{self.version}"
