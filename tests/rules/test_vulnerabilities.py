"""Tests for the known vulnerability rule."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from package_auditor.exceptions import PackageNotFoundError
from package_auditor.models.metadata import VulnerabilityRecord, VulnerabilitySeverity
from package_auditor.rules.vulnerabilities import check_package_vulnerabilities

if TYPE_CHECKING:
    from conftest import FakeRegistryClient, ManifestWriter


def _advisory(severity: VulnerabilitySeverity, ghsa: str) -> VulnerabilityRecord:
    return VulnerabilityRecord(
        severity=severity, advisory_url=f"https://github.com/advisories/{ghsa}"
    )


class TestCheckPackageVulnerabilities:
    """Tests for check_package_vulnerabilities function."""

    @pytest.mark.asyncio
    async def test_no_vulnerabilities_returns_empty(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that packages without advisories pass."""
        write_manifest("App.Api", [("Serilog", "3.1.1")])
        registry.add("Serilog", "3.1.1")

        assert await check_package_vulnerabilities(solution, registry) == []

    @pytest.mark.asyncio
    async def test_single_vulnerability(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that one advisory yields one violation with one entry."""
        advisory = _advisory(VulnerabilitySeverity.HIGH, "GHSA-5crp-9r3c-p9vr")
        write_manifest("App.Api", [("Newtonsoft.Json", "12.0.1")])
        registry.add("Newtonsoft.Json", "12.0.1", vulnerabilities=[advisory])

        violations = await check_package_vulnerabilities(solution, registry)

        assert len(violations) == 1
        assert violations[0].project == "App.Api"
        assert violations[0].package_id == "Newtonsoft.Json"
        assert violations[0].version == "12.0.1"
        assert violations[0].vulnerabilities == [advisory]

    @pytest.mark.asyncio
    async def test_low_severity_still_reported(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that severity is not filtered."""
        write_manifest("App.Api", [("Foo", "1.0.0")])
        registry.add(
            "Foo", "1.0.0", vulnerabilities=[_advisory(VulnerabilitySeverity.LOW, "GHSA-1")]
        )

        assert len(await check_package_vulnerabilities(solution, registry)) == 1

    @pytest.mark.asyncio
    async def test_keeps_advisory_order(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that all advisories are carried in registry order."""
        advisories = [
            _advisory(VulnerabilitySeverity.CRITICAL, "GHSA-2"),
            _advisory(VulnerabilitySeverity.MODERATE, "GHSA-1"),
        ]
        write_manifest("App.Api", [("Foo", "1.0.0")])
        registry.add("Foo", "1.0.0", vulnerabilities=advisories)

        violations = await check_package_vulnerabilities(solution, registry)

        assert violations[0].vulnerabilities == advisories

    @pytest.mark.asyncio
    async def test_reports_each_project(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that every referencing project is reported."""
        write_manifest("App.Api", [("Foo", "1.0.0")])
        write_manifest("App.Worker", [("Foo", "1.0.0"), ("Bar", "1.0.0")])
        registry.add(
            "Foo", "1.0.0", vulnerabilities=[_advisory(VulnerabilitySeverity.HIGH, "GHSA-1")]
        )
        registry.add("Bar", "1.0.0")

        violations = await check_package_vulnerabilities(solution, registry)

        assert [(v.project, v.package_id) for v in violations] == [
            ("App.Api", "Foo"),
            ("App.Worker", "Foo"),
        ]

    @pytest.mark.asyncio
    async def test_unknown_package_aborts_rule(
        self,
        solution: Path,
        write_manifest: ManifestWriter,
        registry: FakeRegistryClient,
    ) -> None:
        """Test that a registry miss is fatal."""
        write_manifest("App.Api", [("Missing", "1.0.0")])

        with pytest.raises(PackageNotFoundError):
            await check_package_vulnerabilities(solution, registry)
