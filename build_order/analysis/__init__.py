"""Dependency graph engine."""

from build_order.analysis.graph import DependencyGraph
from build_order.analysis.plan_builder import PlanBuilder, blocked_by_cycles, build_plan
from build_order.analysis.resolver import STRATEGIES, resolve_reference, resolve_references

__all__ = [
    "DependencyGraph",
    "PlanBuilder",
    "STRATEGIES",
    "blocked_by_cycles",
    "build_plan",
    "resolve_reference",
    "resolve_references",
]
