"""
Files Command - List discovered stats documents.
"""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.types import DataPathStatus
from ...loader import discover_stats_files, load_into_store
from ...state.actions import DiscoveredDataPaths
from ...state.store import Store
from ..utils import echo_warning, get_config

console = Console()

_STATUS_STYLE = {
    DataPathStatus.UNKNOWN: "dim",
    DataPathStatus.LOADING: "yellow",
    DataPathStatus.ERROR: "red",
    DataPathStatus.READY: "green",
}


@click.command()
@click.argument("directory", required=False)
@click.option("--load", "load_all", is_flag=True, help="Load every file to check it parses")
@click.pass_context
def files(ctx: click.Context, directory: Optional[str], load_all: bool):
    """
    List stats documents found below DIRECTORY.

    Defaults to the configured data_dir.
    """
    config = get_config(ctx)
    root = directory or config.data_dir
    paths = discover_stats_files(root, config.patterns)
    if not paths:
        echo_warning(f"No stats files found in {root}")
        return

    store = Store()
    store.dispatch(DiscoveredDataPaths(paths=paths))
    if load_all:
        for path in paths:
            load_into_store(store, path)

    state = store.get_state()
    table = Table(title=f"Stats files in {escape(root)}")
    table.add_column("Path", style="cyan")
    table.add_column("Status")
    for path in paths:
        status = state.status_of(path)
        table.add_row(escape(path), f"[{_STATUS_STYLE[status]}]{status.value}[/]")
    console.print(table)
