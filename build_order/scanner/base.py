"""Abstract base scanner and the shared directory walk."""

from __future__ import annotations

import abc
import fnmatch
import logging
from collections.abc import Iterator
from pathlib import Path

from build_order.models import Dialect, DiscoveryStats, Unit

logger = logging.getLogger(__name__)


class BaseScanner(abc.ABC):
    """Base class for dialect-specific descriptor scanners."""

    dialect: Dialect
    extensions: tuple[str, ...]

    @abc.abstractmethod
    def parse_file(self, file_path: Path) -> Unit:
        """Parse a single descriptor into a unit. Raises ProjectParsingError."""

    def can_parse(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.extensions


def should_skip(name: str, skip_dirs: list[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in skip_dirs)


def walk_files(
    directory: Path,
    skip_dirs: list[str],
    stats: DiscoveryStats,
) -> Iterator[Path]:
    """Yield files under ``directory`` depth-first, in sorted order.

    Directories that cannot be listed are logged and counted as skipped.
    """
    pending = [directory]
    while pending:
        current = pending.pop()
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            logger.warning("Skipping unreadable directory %s: %s", current, e)
            stats.directories_skipped += 1
            stats.error_count += 1
            continue

        stats.directories_scanned += 1
        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                if should_skip(entry.name, skip_dirs):
                    logger.debug("Ignoring directory %s", entry)
                    continue
                subdirs.append(entry)
            else:
                yield entry
        pending.extend(reversed(subdirs))
