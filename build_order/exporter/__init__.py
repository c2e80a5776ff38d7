"""Report rendering and output."""

from __future__ import annotations

from pathlib import Path

import click

from build_order.exporter.json_report import build_report, render_json
from build_order.exporter.text_report import render_text
from build_order.models import BuildPlan, OutputFormat


def render_report(
    plan: BuildPlan,
    fmt: OutputFormat = OutputFormat.TEXT,
    include_packages: bool = False,
    cycles_only: bool = False,
) -> str:
    if fmt is OutputFormat.JSON:
        return render_json(plan, include_packages, cycles_only)
    return render_text(plan, include_packages, cycles_only)


def write_report(text: str, output_path: Path | None = None) -> Path | None:
    """Write to ``output_path`` (creating parent dirs) or echo to stdout."""
    if output_path is None:
        click.echo(text, nl=False)
        return None
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path


__all__ = ["build_report", "render_json", "render_report", "render_text", "write_report"]
