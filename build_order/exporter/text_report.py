"""Human-readable build-order report."""

from __future__ import annotations

from build_order.models import BuildPlan


def render_text(plan: BuildPlan, include_packages: bool = False, cycles_only: bool = False) -> str:
    lines = [
        "Build Order Analysis Results",
        "============================",
        "",
        f"Projects Found: {len(plan.units)}",
        f"Build Levels: {plan.total_levels}",
    ]

    if plan.has_circular_dependencies:
        lines.append(f"Circular Dependencies: {len(plan.circular)}")
        lines.append("")
        lines.append("CIRCULAR DEPENDENCIES DETECTED:")
        for unit_id in sorted(plan.circular):
            suffix = "" if unit_id in plan.cycle_members else "  (depends on a cycle)"
            lines.append(f"  - {unit_id}{suffix}")
    else:
        lines.append("Circular Dependencies: None")

    if cycles_only:
        return "\n".join(lines) + "\n"

    if plan.unresolved:
        lines.append("")
        lines.append(f"Unresolved References: {len(plan.unresolved)}")
        for source_id, reference in plan.unresolved:
            name = plan.units[source_id].display_name if source_id in plan.units else source_id
            lines.append(f"  - {name} -> {reference.raw_path}")

    lines.append("")
    lines.append("Build Order:")
    for index, level in enumerate(plan.levels, start=1):
        noun = "project" if len(level) == 1 else "projects"
        lines.append(f"Level {index} ({len(level)} {noun}):")
        for unit_id in level:
            lines.append(f"  - {unit_id}")
            unit = plan.units.get(unit_id)
            if include_packages and unit is not None:
                for package in unit.package_references:
                    version = f" {package.version}" if package.version else ""
                    lines.append(f"      package: {package.name}{version}")

    return "\n".join(lines) + "\n"
