"""Tests for the scanner layer."""

from pathlib import Path

import pytest

from build_order.errors import ProjectDiscoveryError, ProjectParsingError
from build_order.models import Dialect
from build_order.scanner import parse_project, scan_directory
from build_order.scanner.msbuild_scanner import CSharpProjectScanner, VisualBasicProjectScanner

FIXTURES = Path(__file__).parent / "fixtures"
SOLUTION = FIXTURES / "solution"

_SKIP = ["bin", "obj"]


def test_csharp_scanner():
    scanner = CSharpProjectScanner()
    unit = scanner.parse_file(SOLUTION / "App" / "App.csproj")

    assert unit.display_name == "App"
    assert unit.dialect == Dialect.CSHARP
    assert unit.target_framework == "net8.0"
    assert [r.raw_path for r in unit.declared_references] == [
        "..\\Core\\Core.csproj",
        "..\\Utils\\Utils.vbproj",
        "..\\Missing\\Missing.csproj",
    ]
    assert not any(r.resolved for r in unit.declared_references)
    assert [(p.name, p.version) for p in unit.package_references] == [("Newtonsoft.Json", "13.0.1")]


def test_package_version_from_child_element():
    unit = CSharpProjectScanner().parse_file(SOLUTION / "Core" / "Core.csproj")
    assert unit.target_framework == "net6.0;net8.0"
    assert [(p.name, p.version) for p in unit.package_references] == [("Serilog", "3.1.1")]


def test_vb_scanner_with_msbuild_namespace():
    scanner = VisualBasicProjectScanner()
    unit = scanner.parse_file(SOLUTION / "Utils" / "Utils.vbproj")

    assert unit.dialect == Dialect.VISUAL_BASIC
    assert unit.target_framework == "v4.8"
    assert unit.declared_references == []


def test_can_parse_is_case_insensitive():
    assert CSharpProjectScanner().can_parse(Path("Legacy.CSPROJ"))
    assert not CSharpProjectScanner().can_parse(Path("Legacy.vbproj"))
    assert VisualBasicProjectScanner().can_parse(Path("x/Tools.VbProj"))


def test_parse_project_rejects_unknown_extension(tmp_path):
    path = tmp_path / "native.vcxproj"
    path.write_text("<Project />", encoding="utf-8")
    with pytest.raises(ProjectParsingError):
        parse_project(path)


def test_parse_invalid_xml(tmp_path):
    path = tmp_path / "Broken.csproj"
    path.write_text("<Project><ItemGroup>", encoding="utf-8")
    with pytest.raises(ProjectParsingError) as exc_info:
        parse_project(path)
    assert exc_info.value.project_path == str(path)


def test_scan_directory():
    units, stats = scan_directory(SOLUTION, skip_dirs=_SKIP)
    names = [u.display_name for u in units]

    assert sorted(names) == ["App", "Core", "Utils"]
    assert "Stale" not in names
    assert stats.csharp_found == 2
    assert stats.visualbasic_found == 1
    assert stats.total_found == 3
    assert stats.error_count == 0
    assert stats.directories_scanned >= 4
    assert all(Path(u.id).is_absolute() for u in units)


def test_scan_directory_without_skip_dirs_finds_build_output():
    units, _ = scan_directory(SOLUTION)
    assert "Stale" in [u.display_name for u in units]


def test_scan_directory_keeps_unparseable_projects(tmp_path):
    (tmp_path / "Good").mkdir()
    (tmp_path / "Good" / "Good.csproj").write_text("<Project />", encoding="utf-8")
    (tmp_path / "Bad").mkdir()
    (tmp_path / "Bad" / "Bad.vbproj").write_text("not xml at all", encoding="utf-8")

    units, stats = scan_directory(tmp_path)

    assert sorted(u.display_name for u in units) == ["Bad", "Good"]
    assert stats.error_count == 1
    bad = next(u for u in units if u.display_name == "Bad")
    assert bad.dialect == Dialect.VISUAL_BASIC
    assert bad.declared_references == []


def test_scan_missing_directory(tmp_path):
    with pytest.raises(ProjectDiscoveryError):
        scan_directory(tmp_path / "nope")


def test_scan_file_instead_of_directory():
    with pytest.raises(ProjectDiscoveryError):
        scan_directory(SOLUTION / "App" / "App.csproj")
