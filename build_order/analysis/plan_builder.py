"""Plan builder: resolve references, populate the graph, compute cycles and levels."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from build_order.analysis.graph import DependencyGraph
from build_order.analysis.resolver import STRATEGIES, Strategy, resolve_references
from build_order.errors import InvalidUnitError
from build_order.models import BuildEvent, BuildEventKind, BuildPlan, BuildStats, Unit


class PlanBuilder:
    """Build a dependency-ordered plan from discovered units.

    The builder performs no I/O and no logging; everything worth reporting
    is returned in ``BuildPlan.stats``.
    """

    def __init__(self, strategies: Sequence[Strategy] = STRATEGIES):
        self.strategies = list(strategies)

    def build(self, units: Iterable[Unit]) -> BuildPlan:
        unit_list = list(units)
        self._validate(unit_list)

        graph = DependencyGraph()
        stats = BuildStats(unit_count=len(unit_list))
        plan = BuildPlan(stats=stats)

        for unit in unit_list:
            graph.add_unit(unit)

        for unit in unit_list:
            stats.reference_count += len(unit.declared_references)
            resolved, unresolved = resolve_references(unit, unit_list, self.strategies)
            for reference in resolved:
                graph.add_edge(unit.id, reference.resolved_unit_id)
                stats.resolved_count += 1
                stats.events.append(BuildEvent(BuildEventKind.RESOLVED, unit.id, reference.resolved_unit_id))
            for reference in unresolved:
                plan.unresolved.append((unit.id, reference))
                stats.unresolved_count += 1
                stats.events.append(BuildEvent(BuildEventKind.UNRESOLVED, unit.id, reference.raw_path))

        cycle_members = graph.detect_cycles()
        levels = graph.levels()

        placed = {node for level in levels for node in level}
        blocked = [node for node in graph if node not in placed]

        plan.levels = levels
        plan.cycle_members = cycle_members
        plan.circular = cycle_members | set(blocked)
        plan.units = graph.units

        stats.edge_count = graph.edge_count
        stats.level_sizes = [len(level) for level in levels]
        stats.cycle_members = set(cycle_members)
        for node in blocked:
            detail = "on cycle" if node in cycle_members else "depends on cycle"
            stats.events.append(BuildEvent(BuildEventKind.CYCLE, node, detail))
        for index, level in enumerate(levels):
            for node in level:
                stats.events.append(BuildEvent(BuildEventKind.LEVEL, node, str(index)))

        return plan

    @staticmethod
    def _validate(units: list[Unit]) -> None:
        for position, unit in enumerate(units):
            if unit is None:
                raise InvalidUnitError(f"unit at position {position} is None")
            if not isinstance(unit.id, str) or not unit.id.strip():
                raise InvalidUnitError(f"unit at position {position} has an empty id")


def build_plan(units: Iterable[Unit], strategies: Sequence[Strategy] = STRATEGIES) -> BuildPlan:
    """Convenience wrapper around :class:`PlanBuilder`."""
    return PlanBuilder(strategies).build(units)


def blocked_by_cycles(plan: BuildPlan) -> set[str]:
    """Units left out of the levels without being on a cycle themselves."""
    return plan.circular - plan.cycle_members
