"""CLI commands for propcheck."""

from __future__ import annotations

import asyncio
import importlib
import importlib.util
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from propcheck.config import Parameters, RunnerSettings, load_settings
from propcheck.errors import PropcheckError
from propcheck.generators import Generator
from propcheck.property import Property
from propcheck.runner import check, check_async, format_run_details, sample

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool, level: str = "INFO") -> None:
    """Configure logging based on verbosity level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_target(target: str) -> Any:
    """Resolve ``module:attr`` or ``path/to/file.py:attr``."""
    module_ref, sep, attr = target.rpartition(":")
    if not sep or not module_ref or not attr:
        raise click.BadParameter(f"Expected MODULE:ATTR or FILE.py:ATTR, got {target!r}")

    if module_ref.endswith(".py"):
        file_path = Path(module_ref)
        if not file_path.exists():
            raise click.BadParameter(f"File not found: {module_ref}")
        spec = importlib.util.spec_from_file_location(file_path.stem, file_path)
        if spec is None or spec.loader is None:
            raise click.BadParameter(f"Cannot load {module_ref}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        try:
            module = importlib.import_module(module_ref)
        except ImportError as e:
            raise click.BadParameter(f"Cannot import {module_ref}: {e}") from e

    try:
        obj = getattr(module, attr)
    except AttributeError as e:
        raise click.BadParameter(f"{module_ref} has no attribute {attr!r}") from e
    logger.debug(f"Loaded {attr} from {module_ref}")
    return obj


def _build_parameters(settings: RunnerSettings, **overrides: Any) -> Parameters:
    try:
        return Parameters.from_settings(settings, **overrides)
    except PropcheckError as e:
        raise click.UsageError(e.message) from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """propcheck - Property-based testing with replayable shrinking."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings(config)
    except PropcheckError as e:
        raise click.UsageError(e.message) from e

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose

    setup_logging(verbose, settings.log_level)


@cli.command("check")
@click.argument("target")
@click.option("--seed", type=int, default=None, help="Seed of the run")
@click.option("--num-runs", "-n", type=int, default=None, help="Number of generated values to test")
@click.option("--path", default=None, help="Replay path reported by a previous failure")
@click.option("--end-on-failure", is_flag=True, help="Do not shrink the first failure")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def check_command(
    ctx: click.Context,
    target: str,
    seed: int | None,
    num_runs: int | None,
    path: str | None,
    end_on_failure: bool,
    output_format: str,
) -> None:
    """Check the property TARGET (MODULE:ATTR or FILE.py:ATTR).

    Exits with status 1 when the property fails.
    """
    prop = _load_target(target)
    if not isinstance(prop, Property):
        raise click.BadParameter(f"{target} is not a property built with for_all()")

    settings: RunnerSettings = ctx.obj["settings"]
    params = _build_parameters(
        settings,
        seed=seed,
        num_runs=num_runs,
        path=path,
        end_on_failure=end_on_failure or None,
        verbose=1 if ctx.obj["verbose"] else None,
    )

    logger.debug(f"Checking {target} with seed={params.seed}, num_runs={params.num_runs}")
    try:
        details = asyncio.run(check_async(prop, params)) if prop.is_async else check(prop, params)
    except PropcheckError as e:
        click.echo(f"Error: {e.format_verbose() if ctx.obj['verbose'] else e}", err=True)
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps(details.to_dict(), indent=2, default=str))
    elif details.failed:
        click.echo(format_run_details(details))
    else:
        click.echo(f"✓ Property passed after {details.num_runs} tests (seed: {details.seed})")

    sys.exit(1 if details.failed else 0)


@cli.command("sample")
@click.argument("target")
@click.option("--seed", type=int, default=None, help="Seed of the run")
@click.option("--num-runs", "-n", type=int, default=10, help="Number of values to generate")
@click.option("--path", default=None, help="Sample from the node designated by a replay path")
@click.pass_context
def sample_command(
    ctx: click.Context,
    target: str,
    seed: int | None,
    num_runs: int,
    path: str | None,
) -> None:
    """Print values generated by TARGET, a generator or a property."""
    from rich.console import Console
    from rich.table import Table

    source = _load_target(target)
    if not isinstance(source, (Generator, Property)):
        raise click.BadParameter(f"{target} is neither a generator nor a property")

    params = _build_parameters(ctx.obj["settings"], seed=seed, num_runs=num_runs, path=path)
    params = params.qualified()

    try:
        values = sample(source, params)
    except PropcheckError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    console = Console()
    table = Table(title=f"Samples of {target} (seed: {params.seed})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Value", style="cyan")
    for index, value in enumerate(values):
        table.add_row(str(index), repr(value))
    console.print(table)
