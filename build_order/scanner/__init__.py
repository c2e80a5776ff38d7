"""Scanner registry and dispatcher."""

from __future__ import annotations

import logging
from pathlib import Path

from build_order.errors import ProjectDiscoveryError, ProjectParsingError
from build_order.models import Dialect, DiscoveryStats, Unit
from build_order.scanner.base import BaseScanner, walk_files
from build_order.scanner.msbuild_scanner import (
    CSharpProjectScanner,
    MsBuildProjectScanner,
    VisualBasicProjectScanner,
)

logger = logging.getLogger(__name__)


def _get_scanners() -> list[BaseScanner]:
    return [CSharpProjectScanner(), VisualBasicProjectScanner()]


def parse_project(file_path: Path) -> Unit:
    """Parse one descriptor with the scanner registered for its extension."""
    for scanner in _get_scanners():
        if scanner.can_parse(file_path):
            return scanner.parse_file(file_path)
    raise ProjectParsingError(str(file_path), f"Unsupported project type: {file_path.suffix}")


def scan_directory(
    directory: Path,
    skip_dirs: list[str] | None = None,
) -> tuple[list[Unit], DiscoveryStats]:
    """Discover and parse every project descriptor below ``directory``.

    A descriptor that fails to parse is still returned, with no references,
    and counted in ``DiscoveryStats.error_count``.
    """
    directory = Path(directory)
    if not directory.exists():
        raise ProjectDiscoveryError(str(directory), f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProjectDiscoveryError(str(directory), f"Not a directory: {directory}")

    scanners = _get_scanners()
    stats = DiscoveryStats()
    units: list[Unit] = []

    for path in walk_files(directory, skip_dirs or [], stats):
        scanner = next((s for s in scanners if s.can_parse(path)), None)
        if scanner is None:
            continue
        try:
            unit = scanner.parse_file(path)
        except ProjectParsingError as e:
            logger.warning("Failed to parse %s: %s", e.project_path, e)
            stats.error_count += 1
            unit = Unit.from_path(path, scanner.dialect)
        logger.debug("Found %s project: %s", scanner.dialect.value, path)

        if unit.dialect is Dialect.CSHARP:
            stats.csharp_found += 1
        else:
            stats.visualbasic_found += 1
        units.append(unit)

    units.sort(key=lambda u: u.id)
    return units, stats


__all__ = [
    "BaseScanner",
    "CSharpProjectScanner",
    "MsBuildProjectScanner",
    "VisualBasicProjectScanner",
    "parse_project",
    "scan_directory",
]
