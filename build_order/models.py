"""Data models for the build-order analysis."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

from build_order.errors import ConfigurationError


class Dialect(enum.Enum):
    CSHARP = "csharp"
    VISUAL_BASIC = "visualbasic"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def from_path(cls, path: str | Path) -> Dialect | None:
        suffix = Path(path).suffix.lower()
        for dialect, ext in _EXTENSIONS.items():
            if ext == suffix:
                return dialect
        return None


_EXTENSIONS: dict[Dialect, str] = {
    Dialect.CSHARP: ".csproj",
    Dialect.VISUAL_BASIC: ".vbproj",
}


class OutputFormat(enum.Enum):
    TEXT = "text"
    JSON = "json"


class BuildEventKind(enum.Enum):
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    CYCLE = "cycle"
    LEVEL = "level"


@dataclass
class Reference:
    """A declared project reference, before and after resolution."""
    raw_path: str
    resolved_unit_id: str | None = None

    @property
    def resolved(self) -> bool:
        return self.resolved_unit_id is not None


@dataclass
class PackageReference:
    """External package reference; never part of the graph."""
    name: str
    version: str = ""


@dataclass
class Unit:
    """A discovered project descriptor."""
    id: str
    display_name: str
    dialect: Dialect
    declared_references: list[Reference] = field(default_factory=list)
    target_framework: str = ""
    package_references: list[PackageReference] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: str | Path, dialect: Dialect | None = None) -> Unit:
        """Create a unit for a descriptor file, deriving id and name from the path."""
        full = os.path.abspath(str(path))
        return cls(
            id=full,
            display_name=Path(full).stem,
            dialect=dialect or Dialect.from_path(full) or Dialect.CSHARP,
        )


@dataclass
class BuildEvent:
    """One step of a plan build.

    ``detail`` holds the target id for resolved references, the raw path for
    unresolved ones, the cycle role for cycle events and the level index
    for level events.
    """
    kind: BuildEventKind
    unit_id: str
    detail: str = ""


@dataclass
class BuildStats:
    """Statistics returned from a plan build, for the caller to log."""
    unit_count: int = 0
    reference_count: int = 0
    resolved_count: int = 0
    unresolved_count: int = 0
    edge_count: int = 0
    level_sizes: list[int] = field(default_factory=list)
    cycle_members: set[str] = field(default_factory=set)
    events: list[BuildEvent] = field(default_factory=list)


@dataclass
class BuildPlan:
    """Result of the plan builder.

    ``levels`` holds unit ids grouped by dependency depth; level 0 has no
    dependencies. ``circular`` is every unit that could not be placed in a
    level: the units on a cycle (``cycle_members``) plus units whose
    dependencies run through one.
    """
    levels: list[list[str]] = field(default_factory=list)
    circular: set[str] = field(default_factory=set)
    cycle_members: set[str] = field(default_factory=set)
    units: dict[str, Unit] = field(default_factory=dict)
    unresolved: list[tuple[str, Reference]] = field(default_factory=list)
    stats: BuildStats = field(default_factory=BuildStats)

    @property
    def has_circular_dependencies(self) -> bool:
        return bool(self.circular)

    @property
    def total_levels(self) -> int:
        return len(self.levels)

    @property
    def total_units(self) -> int:
        return sum(len(level) for level in self.levels)

    def level_of(self, unit_id: str) -> int | None:
        for index, level in enumerate(self.levels):
            if unit_id in level:
                return index
        return None


@dataclass
class DiscoveryStats:
    """Statistics collected while walking the source tree."""
    directories_scanned: int = 0
    directories_skipped: int = 0
    error_count: int = 0
    csharp_found: int = 0
    visualbasic_found: int = 0

    @property
    def total_found(self) -> int:
        return self.csharp_found + self.visualbasic_found


_DEFAULT_SKIP_DIRS = ["bin", "obj", ".git", ".vs", "node_modules", "packages"]


@dataclass
class AnalysisConfig:
    """Configuration for a build-order analysis run."""
    source_dir: Path = field(default_factory=lambda: Path("."))
    output_path: Path | None = None
    output_format: OutputFormat | None = None
    verbose: bool = False
    include_packages: bool = False
    detect_cycles_only: bool = False
    skip_dirs: list[str] = field(default_factory=lambda: list(_DEFAULT_SKIP_DIRS))

    def __post_init__(self):
        if self.output_format is None:
            env_format = os.getenv("BUILD_ORDER_FORMAT", "").strip().lower()
            if not env_format:
                self.output_format = OutputFormat.TEXT
            else:
                try:
                    self.output_format = OutputFormat(env_format)
                except ValueError:
                    valid = ", ".join(f.value for f in OutputFormat)
                    raise ConfigurationError(
                        f"Invalid BUILD_ORDER_FORMAT {env_format!r} (expected one of: {valid})"
                    ) from None
        extra = os.getenv("BUILD_ORDER_SKIP_DIRS", "")
        for pattern in (p.strip() for p in extra.split(",")):
            if pattern and pattern not in self.skip_dirs:
                self.skip_dirs.append(pattern)
