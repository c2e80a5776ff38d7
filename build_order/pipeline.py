"""Analysis pipeline: scan -> resolve -> plan -> exit code."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from build_order.analysis import build_plan
from build_order.models import AnalysisConfig, BuildEventKind, BuildPlan, DiscoveryStats, Unit
from build_order.scanner import scan_directory

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_WARNING = 1
EXIT_ERROR = 2

ProgressCallback = Callable[[str, int, int], None]


@dataclass
class AnalysisResult:
    plan: BuildPlan
    discovery: DiscoveryStats = field(default_factory=DiscoveryStats)
    exit_code: int = EXIT_SUCCESS


def run_scan(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
) -> tuple[list[Unit], DiscoveryStats]:
    """Stage 1: discover and parse project descriptors."""
    if progress:
        progress("Scanning", 0, 1)
    started = time.perf_counter()
    units, stats = scan_directory(config.source_dir, skip_dirs=config.skip_dirs)
    logger.info(
        "Discovered %d projects (%d C#, %d VB) in %.2fms; "
        "directories scanned: %d, skipped: %d, errors: %d",
        stats.total_found, stats.csharp_found, stats.visualbasic_found,
        (time.perf_counter() - started) * 1000,
        stats.directories_scanned, stats.directories_skipped, stats.error_count,
    )
    if stats.error_count:
        logger.warning("Discovery finished with %d errors; some projects may be incomplete", stats.error_count)
    if progress:
        progress("Scanning", 1, 1)
    return units, stats


def determine_exit_code(plan: BuildPlan) -> int:
    if plan.has_circular_dependencies:
        return EXIT_WARNING
    if not plan.units:
        return EXIT_WARNING
    return EXIT_SUCCESS


def log_plan(plan: BuildPlan) -> None:
    """Log the statistics and events returned by the plan builder."""
    stats = plan.stats
    for event in stats.events:
        if event.kind is BuildEventKind.RESOLVED:
            logger.debug("Resolved %s -> %s", event.unit_id, event.detail)
        elif event.kind is BuildEventKind.UNRESOLVED:
            logger.warning("Unresolved reference %r in %s", event.detail, event.unit_id)

    logger.info(
        "Projects: %d, references: %d, resolved: %d, unresolved: %d, edges: %d",
        stats.unit_count, stats.reference_count, stats.resolved_count,
        stats.unresolved_count, stats.edge_count,
    )
    for index, size in enumerate(stats.level_sizes, start=1):
        logger.debug("Level %d: %d projects", index, size)
    if plan.circular:
        logger.warning(
            "Circular dependencies detected: %d projects on cycles, %d blocked by them",
            len(plan.cycle_members), len(plan.circular - plan.cycle_members),
        )
        for unit_id in sorted(plan.circular):
            logger.debug("  circular: %s", unit_id)


def run_analysis(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
) -> AnalysisResult:
    """Run the full analysis. Raises ``BuildOrderError`` subclasses on failure."""
    units, discovery = run_scan(config, progress)

    if progress:
        progress("Planning", 0, 1)
    plan = build_plan(units)
    if progress:
        progress("Planning", 1, 1)

    log_plan(plan)
    exit_code = determine_exit_code(plan)
    if not plan.units:
        logger.warning("No projects found in %s", config.source_dir)
    return AnalysisResult(plan=plan, discovery=discovery, exit_code=exit_code)
