"""
Resolve commands for fixguard CLI.

Loads a batch of proposed fixes and reports how conflicts between them
are resolved.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from fixguard.cli.output import Formatter
from fixguard.config.settings import get_settings
from fixguard.conflicts.config import (
    BatchLoadError,
    ConflictOptions,
    load_batch,
    load_priority_weights,
    options_from_settings,
    parse_strategy,
)
from fixguard.conflicts.detector import ConflictDetector
from fixguard.conflicts.ordering import order_for_application

logger = logging.getLogger(__name__)


def _build_options(
    strategy: Optional[str],
    adjacent_conflicts: bool,
    weights: Optional[Path],
) -> ConflictOptions:
    """Combine settings with command line overrides."""
    options = options_from_settings(get_settings())
    if strategy:
        options = replace(options, strategy=parse_strategy(strategy))
    if adjacent_conflicts:
        options = replace(options, treat_adjacent_as_conflict=True)
    if weights:
        options = replace(options, weights=load_priority_weights(weights))
    return options


def resolve(
    ctx: typer.Context,
    batch_file: Path = typer.Argument(
        ...,
        help="JSON or YAML file with {issue, operation} entries",
    ),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy", "-s",
        help="skip-lower-priority, skip-all-conflicts or merge-when-possible",
    ),
    adjacent_conflicts: bool = typer.Option(
        False,
        "--adjacent-conflicts",
        help="Treat touching line ranges as conflicts",
    ),
    weights: Optional[Path] = typer.Option(
        None,
        "--weights",
        help="YAML/JSON file overriding priority scores",
    ),
    show_conflicts: bool = typer.Option(
        False,
        "--show-conflicts",
        help="List every detected conflict",
    ),
):
    """
    Resolve conflicts in a batch of fix operations.

    Examples:
        fixguard resolve fixes.json
        fixguard resolve fixes.yaml --strategy merge-when-possible --adjacent-conflicts
        fixguard -o json resolve fixes.json
    """
    formatter: Formatter = ctx.obj["formatter"]

    try:
        options = _build_options(strategy, adjacent_conflicts, weights)
        batch = load_batch(batch_file)
    except BatchLoadError as e:
        formatter.error(str(e), code="LOAD_ERROR")
        raise typer.Exit(1)

    result = ConflictDetector(options=options).detect_and_resolve(batch)
    formatter.print_resolution_result(result, show_conflicts=show_conflicts)


def plan(
    ctx: typer.Context,
    batch_file: Path = typer.Argument(
        ...,
        help="JSON or YAML file with {issue, operation} entries",
    ),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy", "-s",
        help="skip-lower-priority, skip-all-conflicts or merge-when-possible",
    ),
    adjacent_conflicts: bool = typer.Option(
        False,
        "--adjacent-conflicts",
        help="Treat touching line ranges as conflicts",
    ),
):
    """
    Show the bottom-up order in which resolved fixes would be applied.

    Examples:
        fixguard plan fixes.json
    """
    formatter: Formatter = ctx.obj["formatter"]

    try:
        options = _build_options(strategy, adjacent_conflicts, None)
        batch = load_batch(batch_file)
    except BatchLoadError as e:
        formatter.error(str(e), code="LOAD_ERROR")
        raise typer.Exit(1)

    result = ConflictDetector(options=options).detect_and_resolve(batch)
    logger.debug(f"Planning {result.stats.applicable + result.stats.merged} operations")
    formatter.print_application_plan(order_for_application(result))
