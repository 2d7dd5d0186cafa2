"""Tests for manifest discovery and reference extraction."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from package_auditor.exceptions import ManifestError, ScanError
from package_auditor.manifest import (
    collect_references,
    list_manifests,
    list_references,
    project_name,
)
from package_auditor.models.reference import PackageReference

if TYPE_CHECKING:
    from conftest import ManifestWriter


class TestListManifests:
    """Tests for list_manifests function."""

    def test_finds_manifests_recursively(
        self, solution: Path, write_manifest: ManifestWriter
    ) -> None:
        """Test that manifests in nested directories are found."""
        write_manifest("App.Api")
        write_manifest("src/App.Domain")

        manifests = list_manifests(solution)

        assert [path.name for path in manifests] == [
            "App.Api.csproj",
            "App.Domain.csproj",
        ]

    def test_returns_sorted_paths(
        self, solution: Path, write_manifest: ManifestWriter
    ) -> None:
        """Test that manifests are returned in path order."""
        write_manifest("Zeta")
        write_manifest("Alpha")
        write_manifest("Mid")

        manifests = list_manifests(solution)

        assert manifests == sorted(manifests)
        assert [project_name(path) for path in manifests] == ["Alpha", "Mid", "Zeta"]

    def test_filters_by_pattern(
        self, solution: Path, write_manifest: ManifestWriter
    ) -> None:
        """Test that only filenames matching the pattern are returned."""
        write_manifest("Shop.Domain")
        write_manifest("Shop.Api")

        manifests = list_manifests(solution, "*Domain.csproj")

        assert [path.name for path in manifests] == ["Shop.Domain.csproj"]

    def test_ignores_other_files(self, solution: Path) -> None:
        """Test that non-manifest files are ignored."""
        (solution / "README.md").write_text("# readme")
        (solution / "Directory.Build.props").write_text("<Project />")

        assert list_manifests(solution) == []

    def test_ignores_directories_matching_pattern(self, solution: Path) -> None:
        """Test that a directory named like a manifest is not returned."""
        (solution / "odd.csproj").mkdir()

        assert list_manifests(solution) == []

    def test_missing_root_raises_scan_error(self, tmp_path: Path) -> None:
        """Test that a missing solution directory is an error."""
        with pytest.raises(ScanError, match="does not exist"):
            list_manifests(tmp_path / "missing")


class TestProjectName:
    """Tests for project_name function."""

    def test_strips_extension(self) -> None:
        """Test that only the final extension is removed."""
        assert project_name(Path("/src/App.Domain.csproj")) == "App.Domain"

    def test_simple_name(self) -> None:
        """Test a manifest without dots in its name."""
        assert project_name(Path("Api.csproj")) == "Api"


class TestListReferences:
    """Tests for list_references function."""

    def test_extracts_references_in_document_order(
        self, write_manifest: ManifestWriter
    ) -> None:
        """Test that references keep manifest order."""
        path = write_manifest(
            "App.Api",
            [("Swashbuckle.AspNetCore", "6.6.2"), ("Serilog", "3.1.1")],
        )

        references = list_references(path)

        assert references == [
            PackageReference(
                project="App.Api", package_id="Swashbuckle.AspNetCore", version="6.6.2"
            ),
            PackageReference(project="App.Api", package_id="Serilog", version="3.1.1"),
        ]

    def test_missing_attributes_default_to_empty(
        self, write_manifest: ManifestWriter
    ) -> None:
        """Test that missing Include/Version become empty strings."""
        path = write_manifest("App.Api", [("Serilog", None), (None, "1.0.0")])

        references = list_references(path)

        assert references[0].package_id == "Serilog"
        assert references[0].version == ""
        assert references[1].package_id == ""
        assert references[1].version == "1.0.0"

    def test_duplicates_are_kept(self, write_manifest: ManifestWriter) -> None:
        """Test that a package listed twice is returned twice."""
        path = write_manifest("App.Api", [("Serilog", "3.1.1"), ("Serilog", "3.1.1")])

        assert len(list_references(path)) == 2

    def test_manifest_without_references(self, write_manifest: ManifestWriter) -> None:
        """Test that a manifest without PackageReference elements is empty."""
        path = write_manifest("App.Domain")

        assert list_references(path) == []

    def test_references_in_multiple_item_groups(
        self, write_manifest: ManifestWriter
    ) -> None:
        """Test that references are found in every ItemGroup."""
        content = (
            "<Project>\n"
            '  <ItemGroup><PackageReference Include="A" Version="1.0.0" /></ItemGroup>\n'
            '  <ItemGroup Condition="true">\n'
            '    <ProjectReference Include="..\\Other\\Other.csproj" />\n'
            '    <PackageReference Include="B" Version="2.0.0" />\n'
            "  </ItemGroup>\n"
            "</Project>\n"
        )
        path = write_manifest("App.Api", content=content)

        assert [ref.package_id for ref in list_references(path)] == ["A", "B"]

    def test_malformed_xml_raises_manifest_error(
        self, write_manifest: ManifestWriter
    ) -> None:
        """Test that malformed XML aborts extraction."""
        path = write_manifest("Broken", content="<Project><ItemGroup></Project>")

        with pytest.raises(ManifestError, match="Malformed manifest"):
            list_references(path)

    def test_unreadable_file_raises_manifest_error(self, tmp_path: Path) -> None:
        """Test that a missing file is reported as a manifest error."""
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            list_references(tmp_path / "Missing.csproj")


class TestCollectReferences:
    """Tests for collect_references function."""

    def test_concatenates_in_manifest_order(
        self, solution: Path, write_manifest: ManifestWriter
    ) -> None:
        """Test that references follow manifest then document order."""
        write_manifest("ProjectB", [("Foo", "2.0.0")])
        write_manifest("ProjectA", [("Foo", "1.0.0"), ("Bar", "1.0.0")])

        references = collect_references(solution)

        assert [str(ref) for ref in references] == [
            "ProjectA: Foo@1.0.0",
            "ProjectA: Bar@1.0.0",
            "ProjectB: Foo@2.0.0",
        ]

    def test_empty_solution(self, solution: Path) -> None:
        """Test that an empty solution has no references."""
        assert collect_references(solution) == []
