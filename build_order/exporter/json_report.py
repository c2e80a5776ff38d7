"""Structured (JSON) build-order report."""

from __future__ import annotations

import json

from build_order.models import BuildPlan, Unit


def _project_entry(unit_id: str, unit: Unit | None, include_packages: bool) -> dict:
    entry = {
        "filePath": unit_id,
        "projectName": unit.display_name if unit else "",
        "projectType": unit.dialect.value if unit else "",
        "targetFramework": unit.target_framework if unit else "",
    }
    if include_packages:
        entry["packages"] = [
            {"name": p.name, "version": p.version}
            for p in (unit.package_references if unit else [])
        ]
    return entry


def build_report(plan: BuildPlan, include_packages: bool = False, cycles_only: bool = False) -> dict:
    """Return the report as plain dicts and lists, ready for ``json.dumps``."""
    report: dict = {
        "summary": {
            "projectsFound": len(plan.units),
            "buildLevels": plan.total_levels,
            "hasCircularDependencies": plan.has_circular_dependencies,
            "circularDependencies": sorted(plan.circular),
            "unresolvedReferences": len(plan.unresolved),
        },
    }
    if cycles_only:
        return report

    report["levels"] = [
        {
            "level": index,
            "projects": [
                _project_entry(unit_id, plan.units.get(unit_id), include_packages)
                for unit_id in level
            ],
        }
        for index, level in enumerate(plan.levels, start=1)
    ]
    report["unresolved"] = [
        {"project": source_id, "reference": reference.raw_path}
        for source_id, reference in plan.unresolved
    ]
    return report


def render_json(plan: BuildPlan, include_packages: bool = False, cycles_only: bool = False) -> str:
    return json.dumps(build_report(plan, include_packages, cycles_only), indent=2) + "\n"
