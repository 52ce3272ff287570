from __future__ import annotations

import concurrent.futures
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .actions import (
    filter_for_direction,
    plan_operations,
    summarize_operations,
)
from .compare import build_comparisons
from .config import DEFAULT_CONFIG_PATH
from .inventory import InventoryError, load_inventory
from .models import CompareOptions, FileInfo, SyncDirection, SyncOperation
from .settings import ConfigError, load_compare_options, options_with_overrides

app = typer.Typer(help="Reconcile two file inventories and show the sync plan")
console = Console()

_STATUS_STYLES = {
    "identical": "green",
    "local_newer": "blue",
    "remote_newer": "yellow",
    "local_only": "green",
    "remote_only": "yellow",
    "conflict": "red",
    "size_mismatch": "red",
}


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("treesync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _format_size(info: FileInfo | None) -> str:
    if info is None:
        return "-"
    if info.is_dir:
        return "dir"
    return str(info.size)


def _resolve_options(
    config: Path | None,
    direction: SyncDirection | None,
    exclude: list[str] | None,
    compare_size: bool | None,
    compare_timestamp: bool | None,
) -> CompareOptions:
    if config is not None:
        options = load_compare_options(config)
    elif DEFAULT_CONFIG_PATH.expanduser().is_file():
        options = load_compare_options(DEFAULT_CONFIG_PATH)
    else:
        options = CompareOptions()

    patterns = None
    if exclude:
        patterns = (*options.exclude_patterns, *exclude)
    return options_with_overrides(
        options,
        direction=direction,
        exclude_patterns=patterns,
        compare_size=compare_size,
        compare_timestamp=compare_timestamp,
    )


def _load_both(
    local: Path, remote: Path
) -> tuple[dict[str, FileInfo], dict[str, FileInfo]]:
    with concurrent.futures.ThreadPoolExecutor(max_workers=2) as pool:
        future_local = pool.submit(load_inventory, local)
        future_remote = pool.submit(load_inventory, remote)
        return future_local.result(), future_remote.result()


def _render_plan(operations: list[SyncOperation]) -> None:
    table = Table(show_lines=False)
    table.add_column("Path")
    table.add_column("Status")
    table.add_column("Action")
    table.add_column("Local", justify="right")
    table.add_column("Remote", justify="right")
    for op in operations:
        comparison = op.comparison
        style = _STATUS_STYLES.get(comparison.status.value, "")
        path = comparison.relative_path + ("/" if comparison.is_dir else "")
        table.add_row(
            path,
            f"[{style}]{comparison.status.value}[/{style}]"
            if style
            else comparison.status.value,
            op.action.value,
            _format_size(comparison.local_info),
            _format_size(comparison.remote_info),
        )
    console.print(table)


@app.command()
def plan(
    local: Path = typer.Argument(..., help="JSON inventory of the local tree"),
    remote: Path = typer.Argument(..., help="JSON inventory of the remote tree"),
    direction: SyncDirection | None = typer.Option(
        None,
        help="Sync direction (default: from config, else bidirectional)",
    ),
    config: Path | None = typer.Option(
        None,
        help=f"TOML file with a [compare] table (default: {DEFAULT_CONFIG_PATH} if present)",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        help="Extra exclude pattern, may be repeated",
    ),
    compare_size: bool | None = typer.Option(
        None,
        "--compare-size/--no-compare-size",
        help="Override size comparison",
    ),
    compare_timestamp: bool | None = typer.Option(
        None,
        "--compare-timestamp/--no-compare-timestamp",
        help="Override timestamp comparison",
    ),
    only_direction: bool = typer.Option(
        False,
        help="Only list differences that flow in the chosen direction",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Compare two inventories and print the recommended action per path."""
    _configure_logging(verbose)

    try:
        options = _resolve_options(
            config, direction, exclude, compare_size, compare_timestamp
        )
    except ConfigError as exc:
        console.print(f"[red]Invalid config:[/red] {exc}")
        raise typer.Exit(1)

    try:
        local_files, remote_files = _load_both(local, remote)
    except InventoryError as exc:
        console.print(f"[red]Invalid inventory:[/red] {exc}")
        raise typer.Exit(1)

    comparisons = build_comparisons(local_files, remote_files, options)
    if only_direction:
        comparisons = filter_for_direction(comparisons, options.direction)
    operations = plan_operations(comparisons, options.direction)
    summary = summarize_operations(operations)

    if as_json:
        payload = {
            "options": options.to_dict(),
            "operations": [op.to_dict() for op in operations],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(f"Local entries: {len(local_files)}")
    console.print(f"Remote entries: {len(remote_files)}")
    console.print(f"Direction: {options.direction.value}")
    if operations:
        _render_plan(operations)
    else:
        console.print("[green]Nothing to do.[/green]")
    console.print(
        f"Upload: {summary.upload}  Download: {summary.download}  "
        f"Delete local: {summary.delete_local}  Delete remote: {summary.delete_remote}  "
        f"Skip: {summary.skip}  Ask: {summary.ask_user}"
    )


@app.command()
def defaults() -> None:
    """Print the default compare options as JSON."""
    typer.echo(json.dumps(CompareOptions().to_dict(), indent=2))


if __name__ == "__main__":
    app()
