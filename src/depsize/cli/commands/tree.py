"""
Tree Command - Hierarchical view of module costs.

Expansion follows the same rules as the interactive view: collapsed by
default, ``--expand-all`` opens every row, ``--expand`` opens single
rows and ``--focus`` reveals a module by expanding its nearest
collapsible ancestor.
"""

from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.types import ExpandMode, ModuleRecord
from ...state.actions import ChangeExpandRecordsMode, OnExpandRecords, OnFocusChanged
from ...state.models import State
from ...stats.index import build_index
from ...stats.sorting import sort_modules
from ..utils import echo_warning, format_size, open_or_exit

console = Console()


@click.command()
@click.argument("stats_file", type=click.Path())
@click.option("--chunk", "chunk_id", default=None, help="Chunk id to restrict to")
@click.option("-x", "--exclude", multiple=True, help="Module id to exclude (repeatable)")
@click.option("-e", "--expand", multiple=True, help="Module id to expand (repeatable)")
@click.option("--expand-all", is_flag=True, help="Expand every module")
@click.option("-f", "--focus", default=None, help="Module id to reveal and highlight")
@click.option("-d", "--max-depth", default=-1, type=int,
              help="Maximum depth to print (-1 for unlimited)")
def tree(
    stats_file: str,
    chunk_id: Optional[str],
    exclude: tuple,
    expand: tuple,
    expand_all: bool,
    focus: Optional[str],
    max_depth: int,
) -> None:
    """
    Print the module tree of STATS_FILE with cumulative sizes.
    """
    store = open_or_exit(stats_file, chunk_id=chunk_id, exclude=exclude)
    if expand_all:
        store.dispatch(ChangeExpandRecordsMode(mode=ExpandMode.EXPAND_ALL))
    for module_id in expand:
        store.dispatch(OnExpandRecords(module_id=module_id))
    if focus is not None:
        store.dispatch(OnFocusChanged(element_id=focus))

    state = store.get_state()
    data = state.calculated_full_module_data
    if data is None or data.is_empty:
        echo_warning("No modules left in this scope")
        return

    index = build_index(data.extended_modules)
    root = Tree(
        f"📦 [bold]{escape(stats_file)}[/bold] [dim]total {format_size(data.total_size)}[/dim]"
    )
    roots = sort_modules((index[r] for r in data.roots), state.sort)
    # iterative; module chains can be deeper than the recursion limit
    stack: List[Tuple[Tree, ModuleRecord, int]] = [(root, r, 0) for r in reversed(roots)]
    while stack:
        branch, record, depth = stack.pop()
        open_row = state.is_expanded(record.id) and (max_depth < 0 or depth < max_depth)
        node = branch.add(_label(record, state, collapsed=bool(record.children) and not open_row))
        if open_row:
            children = sort_modules((index[c] for c in record.children), state.sort)
            stack.extend((node, child, depth + 1) for child in reversed(children))
    console.print(root)


def _label(record: ModuleRecord, state: State, collapsed: bool) -> str:
    label = (
        f"[cyan]{escape(record.name)}[/cyan] "
        f"[bold]{format_size(record.cumulative_size)}[/bold] "
        f"[dim](own {format_size(record.size)}, id {escape(record.id)})[/dim]"
    )
    if collapsed:
        label += f" [yellow]+{len(record.children)}[/yellow]"
    if record.id == state.currently_focused_element_id:
        label = f"[reverse]{label}[/reverse]"
    return label
