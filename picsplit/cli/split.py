"""Balanced list construction commands for picsplit CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from picsplit.balancing import balance_pool, prepare_pool
from picsplit.cli.utils import (
    console,
    print_error,
    print_info,
    print_success,
    summary_table,
)
from picsplit.config import load_config
from picsplit.data.serialization import read_jsonlines, write_jsonlines
from picsplit.errors import PicsplitError
from picsplit.lists import ListCollection

logger = logging.getLogger(__name__)


def _collect_overrides(**options: Any) -> dict[str, Any]:
    """Map CLI options that were given onto config sections."""
    sections = {
        "pool_size": ("pool", "pool_size"),
        "covariates": ("pool", "covariates"),
        "name_agreement_max": ("pool", "name_agreement_max"),
        "iterations": ("search", "iterations"),
        "seed": ("search", "seed"),
        "batch_size": ("search", "batch_size"),
        "workers": ("search", "n_workers"),
        "separator": ("data", "separator"),
        "decimal": ("data", "decimal"),
        "label_column": ("data", "label_column"),
        "id_column": ("data", "id_column"),
        "output_file": ("paths", "lists_file"),
        "summary_csv": ("paths", "summary_csv"),
        "log_level": ("logging", "level"),
    }
    overrides: dict[str, Any] = {}
    for option, value in options.items():
        if value is None:
            continue
        section, field = sections[option]
        if option == "covariates":
            value = [name.strip() for name in value.split(",") if name.strip()]
        overrides.setdefault(section, {})[field] = value
    return overrides


@click.command()
@click.argument(
    "items_files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output JSONL file for the list collection",
)
@click.option("--summary-csv", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--pool-size", type=int, help="Pool size 2N (must be even)")
@click.option("--covariates", help="Comma-separated covariate columns")
@click.option(
    "--name-agreement-max", type=float, help="Maximum name agreement (H index)"
)
@click.option("--iterations", type=int, help="Number of random partitions to score")
@click.option("--seed", type=int, help="Random seed for reproducibility")
@click.option("--batch-size", type=int, help="Partitions scored per batch")
@click.option("--workers", type=int, help="Worker processes")
@click.option("--separator", help="Field separator of the input files")
@click.option("--decimal", type=click.Choice([".", ","]), help="Decimal mark")
@click.option("--label-column", help="Column holding picture labels")
@click.option("--id-column", help="Column holding item identifiers")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the result without writing files",
)
@click.pass_context
def split(
    ctx: click.Context,
    items_files: tuple[Path, ...],
    config_path: Path | None,
    dry_run: bool,
    **options: Any,
) -> None:
    r"""Split a candidate pool into two balanced lists.

    Reads one or more candidate tables (joined on the label column), keeps
    the POOL_SIZE candidates with the best name agreement, and searches
    random bipartitions for the split whose paired items are most similar
    on the standardized covariates.

    \b
    Examples:
        $ picsplit split norms.csv -o lists.jsonl --pool-size 310 --seed 42
        $ picsplit split agreement.csv frequency.csv aoa.csv \
            --separator ";" --decimal "," --iterations 100000
        $ picsplit split --config picsplit.yaml --summary-csv summary.csv
    """
    try:
        overrides = _collect_overrides(**options)
        if items_files:
            overrides.setdefault("data", {})["files"] = [str(p) for p in items_files]
        config = load_config(config_path, overrides)
        config.logging.apply()

        if not config.data.files:
            print_error("No input files given (pass ITEMS_FILES or data.files)")
            ctx.exit(1)

        pool = prepare_pool(config)
        print_info(
            f"Pool of {len(pool)} items, covariates: "
            f"{', '.join(pool.covariate_names)}"
        )

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(
                f"Scoring {config.search.iterations} partitions...",
                total=config.search.iterations,
            )
            result = balance_pool(
                pool,
                config.search,
                progress=lambda done, total: progress.update(task, completed=done),
            )
    except (PicsplitError, ValidationError) as e:
        print_error(str(e))
        ctx.exit(1)

    collection = ListCollection.from_partition(
        result.pool,
        result.partition,
        result.summary,
        partitioning_config=config.model_dump(mode="json", include={"pool", "search"}),
    )

    console.print(summary_table(result.summary))
    console.print(
        f"Best score: {result.partition.score:.4f} "
        f"(iteration {result.partition.iteration})"
    )

    lists_file = config.paths.lists_file
    summary_csv = config.paths.summary_csv
    if dry_run:
        print_info(f"[DRY RUN] Would write 2 lists to: {lists_file}")
        if summary_csv is not None:
            print_info(f"[DRY RUN] Would write summary to: {summary_csv}")
        return

    try:
        write_jsonlines([collection], lists_file)
        if summary_csv is not None:
            summary_csv.parent.mkdir(parents=True, exist_ok=True)
            result.summary.to_frame().to_csv(summary_csv)
            print_success(f"Wrote summary: {summary_csv}")
    except (PicsplitError, OSError) as e:
        print_error(f"Failed to write output: {e}")
        ctx.exit(1)
    print_success(f"Created 2 lists of {pool.half_size} items: {lists_file}")


@click.command(name="show-stats")
@click.argument(
    "lists_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def show_stats(ctx: click.Context, lists_file: Path) -> None:
    """Show statistics of list collections saved by ``split``.

    Parameters
    ----------
    ctx : click.Context
        Click context object.
    lists_file : Path
        JSONL file of list collections.

    Examples
    --------
    $ picsplit show-stats lists.jsonl
    """
    try:
        collections = read_jsonlines(lists_file, ListCollection)
    except PicsplitError as e:
        print_error(f"Failed to read lists: {e}")
        ctx.exit(1)

    if not collections:
        print_error("No list collections found")
        ctx.exit(1)

    for collection in collections:
        table = Table(title=f"{collection.name} (score {_score(collection)})")
        table.add_column("List", style="cyan")
        table.add_column("Items", justify="right", style="yellow")
        table.add_column("Statistic", style="magenta")
        table.add_column("Values", style="green")
        for exp_list in sorted(collection.lists, key=lambda x: x.list_number):
            for statistic in ("means", "sds"):
                values = exp_list.balance_metrics.get(statistic, {})
                table.add_row(
                    exp_list.name,
                    str(len(exp_list.item_refs)),
                    statistic,
                    ", ".join(
                        f"{name}={_fmt(value)}" for name, value in values.items()
                    ),
                )
        console.print(table)

        coverage = collection.validate_coverage(_pool_ids(collection))
        console.print(f"Total Items: {coverage['total_assigned']}")
        problems = {
            "assigned to more than one list": coverage["duplicate_items"],
            "not assigned to any list": coverage["missing_items"],
            "not in the pool": coverage["unknown_items"],
        }
        for problem, item_ids in problems.items():
            if item_ids:
                print_error(f"Items {problem}: {item_ids}")
        if not coverage["valid"]:
            ctx.exit(1)


def _pool_ids(collection: ListCollection) -> set[str]:
    """Return the ids of the partitioned pool, or the assigned ids if unknown."""
    pool_ids = collection.partitioning_stats.get("pool_item_ids")
    if pool_ids is not None:
        return set(pool_ids)
    return {item_id for exp_list in collection.lists for item_id in exp_list.item_refs}


def _score(collection: ListCollection) -> str:
    score = collection.partitioning_stats.get("score")
    return "n/a" if score is None else f"{score:.4f}"


def _fmt(value: float | None) -> str:
    return "NA" if value is None else f"{value:.2f}"
