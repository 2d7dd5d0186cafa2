"""Shared fixtures for package-auditor tests."""
from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional

import pytest
from click.testing import CliRunner

from package_auditor.exceptions import PackageNotFoundError
from package_auditor.models.metadata import PackageMetadata
from package_auditor.registry.base import BaseRegistryClient
from package_auditor.versioning import parse_version

ManifestWriter = Callable[..., Path]


class FakeRegistryClient(BaseRegistryClient):
    """In-memory registry that records every lookup."""

    def __init__(self) -> None:
        self.packages: dict[tuple[str, str], PackageMetadata] = {}
        self.calls: list[tuple[str, str]] = []
        self.deprecation_calls: list[tuple[str, str]] = []

    def add(self, package_id: str, version: str, **fields: Any) -> PackageMetadata:
        metadata = PackageMetadata(package_id=package_id, version=version, **fields)
        self.packages[(package_id, version)] = metadata
        return metadata

    async def get_metadata(self, package_id: str, version: str) -> PackageMetadata:
        self.calls.append((package_id, version))
        parse_version(version)
        try:
            return self.packages[(package_id, version)]
        except KeyError:
            raise PackageNotFoundError(package_id, version) from None

    async def get_deprecation_reasons(self, package_id: str, version: str) -> list[str]:
        self.deprecation_calls.append((package_id, version))
        return list(self.packages[(package_id, version)].deprecation_reasons)


def manifest_xml(references: Sequence[tuple[Optional[str], Optional[str]]]) -> str:
    """Build an SDK-style project file with the given package references."""
    items = []
    for include, version in references:
        attributes = ""
        if include is not None:
            attributes += f' Include="{include}"'
        if version is not None:
            attributes += f' Version="{version}"'
        items.append(f"    <PackageReference{attributes} />")
    return (
        '<Project Sdk="Microsoft.NET.Sdk">\n'
        "  <PropertyGroup>\n"
        "    <TargetFramework>net8.0</TargetFramework>\n"
        "  </PropertyGroup>\n"
        "  <ItemGroup>\n" + "\n".join(items) + "\n  </ItemGroup>\n"
        "</Project>\n"
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> FakeRegistryClient:
    """Provide an empty in-memory registry."""
    return FakeRegistryClient()


@pytest.fixture
def solution(tmp_path: Path) -> Path:
    """Provide an empty solution directory."""
    root = tmp_path / "solution"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(solution: Path) -> ManifestWriter:
    """Provide a helper writing <name>/<name>.csproj below the solution."""

    def _write(
        name: str,
        references: Sequence[tuple[Optional[str], Optional[str]]] = (),
        content: Optional[str] = None,
    ) -> Path:
        project_dir = solution / name
        project_dir.mkdir(parents=True, exist_ok=True)
        path = project_dir / f"{Path(name).name}.csproj"
        path.write_text(content if content is not None else manifest_xml(references))
        return path

    return _write
