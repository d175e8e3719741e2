"""Coverage Rollup CLI - compute coverage measures over a component tree."""

import json
import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from coverage_rollup import __version__, compute_coverage, render_tree
from coverage_rollup.config import (
    ConfigLoadError,
    ConfigValidationError,
    RollupConfig,
    generate_config_template,
    get_config,
    get_global_config_path,
    get_project_config_path,
    load_config_file,
)
from coverage_rollup.renderers import OutputFormat
from coverage_rollup.report.loader import ReportLoadError, load_report

console = Console()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(1)


def _load_effective_config(ctx: click.Context) -> RollupConfig:
    config_path = ctx.obj.get("config_path")
    try:
        return get_config(config_path=Path(config_path) if config_path else None)
    except (ConfigLoadError, ConfigValidationError) as e:
        _fail(str(e))


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="COVERAGE_ROLLUP_LOG_LEVEL",
    help="Logging verbosity (default: WARNING)",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="COVERAGE_ROLLUP_CONFIG",
    help="Config file to use instead of ./.coverage-rollup.json",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, config_path: str | None) -> None:
    """Coverage Rollup - bottom-up coverage aggregation.

    Rolls per-file coverage counts up through directories, modules and
    the project. Unit test files never count toward coverage.
    """
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)
    logging.getLogger("coverage_rollup").setLevel(log_level.upper())

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
def version() -> None:
    """Show version."""
    console.print(f"coverage-rollup {__version__}")


@main.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (default from config: ascii)",
)
@click.option("--depth", "-d", type=click.IntRange(min=0), default=None, help="Maximum tree depth to render")
@click.option(
    "--formula", "formulas",
    multiple=True,
    help="Formula to compute (repeatable; default from config: all)",
)
@click.option("--scale", type=click.IntRange(0, 6), default=None, help="Decimal places in percentages")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write output to a file")
@click.pass_context
def compute(
    ctx: click.Context,
    report: Path,
    output_format: str | None,
    depth: int | None,
    formulas: tuple[str, ...],
    scale: int | None,
    output: Path | None,
) -> None:
    """Compute coverage for every component of REPORT (JSON or YAML)."""
    config = _load_effective_config(ctx)

    formula_names = list(formulas) if formulas else config.formulas.resolve_enabled()
    decimal_scale = scale if scale is not None else config.formulas.decimal_scale
    fmt = OutputFormat(output_format or config.output.format)
    max_depth = depth if depth is not None else config.output.depth

    try:
        tree = load_report(report)
        compute_coverage(tree, formula_names, scale=decimal_scale)
    except ReportLoadError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(str(e))

    rendered = render_tree(tree, metric_keys=formula_names, format=fmt, depth=max_depth)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered)
        console.print(f"[green]Wrote {fmt.value} output to[/green] {output}")
    else:
        click.echo(rendered, nl=False)


@main.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show effective configuration (merged from all sources).

    Output is JSON format for easy parsing.
    """
    effective = _load_effective_config(ctx)
    click.echo(json.dumps(effective.to_dict(), indent=2))


@config.command("init")
@click.option("--global", "is_global", is_flag=True, help="Create global config at ~/.coverage_rollup.json")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing config file")
def config_init(is_global: bool, force: bool) -> None:
    """Initialize a configuration file with every option at its default.

    By default, creates .coverage-rollup.json in the current directory.
    """
    config_path = get_global_config_path() if is_global else get_project_config_path()

    if config_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {config_path}")
        console.print("Use --force to overwrite")
        raise SystemExit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(generate_config_template(), indent=2))

    console.print(f"[green]Created config file:[/green] {config_path}")


@config.command("validate")
@click.pass_context
def config_validate(ctx: click.Context) -> None:
    """Validate configuration files.

    Checks global and project config files for valid JSON, unknown
    fields and invalid values. Exits non-zero if errors are found.
    """
    config_path = ctx.obj.get("config_path")
    paths = [get_global_config_path(), Path(config_path) if config_path else get_project_config_path()]

    errors = 0
    for path in paths:
        if not path.exists():
            continue
        try:
            load_config_file(path, strict=True).validate()
            console.print(f"[green]✓[/green] {path}")
        except (ConfigLoadError, ConfigValidationError) as e:
            console.print(f"[red]✗[/red] {path}: {e}")
            errors += 1

    if errors:
        raise SystemExit(1)
    console.print("Configuration is valid")


if __name__ == "__main__":
    main()
