"""MSBuild descriptor scanners for C# and Visual Basic projects."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from build_order.errors import ProjectParsingError
from build_order.models import Dialect, PackageReference, Reference, Unit
from build_order.scanner.base import BaseScanner

_MSBUILD_NS = {"msbuild": "http://schemas.microsoft.com/developer/msbuild/2003"}


def _find_all(root: ET.Element, name: str) -> list[ET.Element]:
    # Legacy project files carry the MSBuild namespace, SDK-style ones don't
    return root.findall(f".//msbuild:{name}", _MSBUILD_NS) + root.findall(f".//{name}")


def _child_text(elem: ET.Element, name: str) -> str:
    for child in (elem.find(f"msbuild:{name}", _MSBUILD_NS), elem.find(name)):
        if child is not None and child.text:
            return child.text.strip()
    return ""


class MsBuildProjectScanner(BaseScanner):
    """Shared XML parsing for both project dialects."""

    def parse_file(self, file_path: Path) -> Unit:
        unit = Unit.from_path(file_path, self.dialect)
        try:
            root = ET.parse(file_path).getroot()
        except ET.ParseError as e:
            raise ProjectParsingError(str(file_path), f"Invalid XML in project file: {e}") from e
        except OSError as e:
            raise ProjectParsingError(str(file_path), f"Cannot read project file: {e}") from e

        for name in ("TargetFramework", "TargetFrameworks", "TargetFrameworkVersion"):
            nodes = _find_all(root, name)
            if nodes and nodes[0].text:
                unit.target_framework = nodes[0].text.strip()
                break

        for elem in _find_all(root, "ProjectReference"):
            include = elem.get("Include")
            if include:
                unit.declared_references.append(Reference(raw_path=include))

        for elem in _find_all(root, "PackageReference"):
            include = elem.get("Include")
            if include:
                version = elem.get("Version") or _child_text(elem, "Version")
                unit.package_references.append(PackageReference(name=include, version=version))

        return unit


class CSharpProjectScanner(MsBuildProjectScanner):
    dialect = Dialect.CSHARP
    extensions = (".csproj",)


class VisualBasicProjectScanner(MsBuildProjectScanner):
    dialect = Dialect.VISUAL_BASIC
    extensions = (".vbproj",)
