"""Click CLI with scan and plan subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from build_order import __version__
from build_order.errors import BuildOrderError
from build_order.exporter import render_report, write_report
from build_order.models import AnalysisConfig, Dialect, OutputFormat
from build_order.pipeline import EXIT_ERROR, run_analysis, run_scan

logger = logging.getLogger(__name__)

_FORMAT_CHOICES = [fmt.value for fmt in OutputFormat]


def _configure_logging(verbose: bool, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(version=__version__)
def cli():
    """build-order: compute a parallel build order for .NET project trees."""


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def scan(source_dir: Path, verbose: bool):
    """List the project descriptors found below SOURCE_DIR."""
    _configure_logging(verbose, quiet=not verbose)
    try:
        config = AnalysisConfig(source_dir=source_dir)
        units, stats = run_scan(config)
    except BuildOrderError as e:
        raise click.ClickException(str(e))

    if not units:
        click.echo("No projects found.")
        return

    click.echo(f"\nFound {len(units)} project(s):\n")
    for dialect in Dialect:
        members = [u for u in units if u.dialect is dialect]
        if not members:
            continue
        click.echo(click.style(f"{dialect.value} ({len(members)})", fg="cyan"))
        for unit in members:
            framework = click.style(unit.target_framework or "-", dim=True)
            click.echo(f"  {unit.display_name:<30} {framework}  {unit.id}")
            for reference in unit.declared_references:
                click.echo(f"      -> {reference.raw_path}")
        click.echo()

    if stats.error_count:
        click.echo(click.style(f"{stats.error_count} error(s) during discovery", fg="yellow"))


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", "output_path", type=click.Path(dir_okay=False, path_type=Path), help="Write the report to a file")
@click.option("-f", "--format", "output_format", type=click.Choice(_FORMAT_CHOICES), default=None, help="Report format (default: text)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.option("--include-packages", is_flag=True, help="List package references per project")
@click.option("--detect-cycles-only", is_flag=True, help="Only report circular dependencies")
@click.pass_context
def plan(
    ctx: click.Context,
    source_dir: Path,
    output_path: Path | None,
    output_format: str | None,
    verbose: bool,
    quiet: bool,
    include_packages: bool,
    detect_cycles_only: bool,
):
    """Analyze SOURCE_DIR and print the dependency-ordered build plan.

    Exit codes: 0 success, 1 cycles detected or no projects found,
    2 analysis error.
    """
    _configure_logging(verbose, quiet)
    try:
        config = AnalysisConfig(
            source_dir=source_dir,
            output_path=output_path,
            output_format=OutputFormat(output_format) if output_format else None,
            verbose=verbose,
            include_packages=include_packages,
            detect_cycles_only=detect_cycles_only,
        )
        logger.debug("Configuration: %s", config)

        result = run_analysis(config)
        report = render_report(
            result.plan,
            config.output_format,
            include_packages=config.include_packages,
            cycles_only=config.detect_cycles_only,
        )
        written = write_report(report, config.output_path)
    except BuildOrderError as e:
        logger.debug("Analysis failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_ERROR)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(EXIT_ERROR)

    if written is not None:
        logger.info("Report written to %s", written)

    ctx.exit(result.exit_code)


if __name__ == "__main__":
    cli()
