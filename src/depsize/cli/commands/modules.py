"""
Modules Command - Table of modules ranked by size.

Drives the same actions a UI would dispatch (sort header clicks, filter
edits, blacklist buttons) and renders the resulting state.
"""

import json
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.types import ModuleRecord, SortableField, SortDirection
from ...state.actions import OnFiltered, OnSorted
from ...state.store import Store
from ...stats.filtering import filter_modules
from ...stats.sorting import sort_modules
from ..utils import echo_warning, format_size, get_config, open_or_exit

console = Console()


def apply_sort(store: Store, field: SortableField, direction: SortDirection) -> None:
    """Dispatch sort clicks until the store sorts by ``field`` in ``direction``."""
    for _ in range(2):
        sort = store.get_state().sort
        if sort.field == field and sort.direction == direction:
            return
        store.dispatch(OnSorted(field=field))


def record_to_dict(record: ModuleRecord) -> Dict[str, Any]:
    data = record.model_dump(by_alias=True, exclude={"children", "requires", "required_by"})
    data["requiredByCount"] = record.required_by_count
    data["requirementsCount"] = record.requirements_count
    return data


@click.command()
@click.argument("stats_file", type=click.Path())
@click.option("--chunk", "chunk_id", default=None, help="Chunk id to restrict to")
@click.option("-x", "--exclude", multiple=True, help="Module id to exclude (repeatable)")
@click.option("-s", "--sort", "sort_field", default=None,
              type=click.Choice([f.value for f in SortableField]),
              help="Field to sort by")
@click.option("--asc", is_flag=True, help="Sort ascending")
@click.option("-n", "--name", default="", help="Module name substring")
@click.option("--min-size", default="", help="Minimum cumulative size in bytes")
@click.option("--max-size", default="", help="Maximum cumulative size in bytes")
@click.option("--min-required-by", default="", help="Minimum number of requiring modules")
@click.option("--max-required-by", default="", help="Maximum number of requiring modules")
@click.option("--min-requires", default="", help="Minimum number of required modules")
@click.option("--max-requires", default="", help="Maximum number of required modules")
@click.option("-l", "--limit", default=None, type=int, help="Maximum rows to show (0 for all)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def modules(
    ctx: click.Context,
    stats_file: str,
    chunk_id: Optional[str],
    exclude: tuple,
    sort_field: Optional[str],
    asc: bool,
    name: str,
    min_size: str,
    max_size: str,
    min_required_by: str,
    max_required_by: str,
    min_requires: str,
    max_requires: str,
    limit: Optional[int],
    as_json: bool,
) -> None:
    """
    Rank the modules of STATS_FILE by size.
    """
    config = get_config(ctx)
    store = open_or_exit(stats_file, chunk_id=chunk_id, exclude=exclude)

    if sort_field is None:
        field, direction = config.sort.field, config.sort.direction
    else:
        field = SortableField(sort_field)
        direction = SortDirection.ASC if asc else SortDirection.DESC
    apply_sort(store, field, direction)

    store.dispatch(OnFiltered(changes={
        "moduleName": name,
        "cumulativeSizeMin": min_size,
        "cumulativeSizeMax": max_size,
        "requiredByCountMin": min_required_by,
        "requiredByCountMax": max_required_by,
        "requirementsCountMin": min_requires,
        "requirementsCountMax": max_requires,
    }))

    state = store.get_state()
    data = state.calculated_full_module_data
    records = data.extended_modules if data else ()
    rows: List[ModuleRecord] = sort_modules(filter_modules(records, state.filters), state.sort)
    limit = config.limit if limit is None else limit
    shown = rows[:limit] if limit > 0 else rows

    if as_json:
        click.echo(json.dumps({
            "file": stats_file,
            "chunk": state.selected_chunk_id,
            "excluded": list(state.blacklisted_module_ids),
            "totalSize": data.total_size if data else 0,
            "count": len(rows),
            "modules": [record_to_dict(r) for r in shown],
        }, indent=2))
        return

    if not rows:
        echo_warning("No modules match")
        return

    scope = f"chunk {state.selected_chunk_id}" if state.selected_chunk_id else "whole bundle"
    title = f"{stats_file} ({scope}, total {format_size(data.total_size)})"
    table = Table(title=escape(title))
    table.add_column("Id", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Cumulative", justify="right", style="bold")
    table.add_column("Required by", justify="right")
    table.add_column("Requires", justify="right")
    for record in shown:
        table.add_row(
            escape(record.id),
            escape(record.name),
            format_size(record.size),
            format_size(record.cumulative_size),
            str(record.required_by_count),
            str(record.requirements_count),
        )
    console.print(table)
    if len(shown) < len(rows):
        click.echo(f"  ... and {len(rows) - len(shown)} more modules")
