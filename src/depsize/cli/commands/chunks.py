"""
Chunks Command - Show the chunks of a stats document.

Chunks are printed as a tree, each chunk under its parent chunks.
"""

import json
from typing import Dict, List, Optional, Set

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ...core.types import ChunkInfo
from ...loader import read_stats
from ...stats.chunks import chunks_by_parent, list_chunks
from ..utils import echo_error, echo_warning

console = Console()


@click.command()
@click.argument("stats_file", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def chunks(stats_file: str, as_json: bool):
    """
    List the chunks of STATS_FILE grouped by parent chunk.
    """
    result = read_stats(stats_file)
    if result.is_err():
        echo_error(str(result.error))
        raise SystemExit(1)
    document = result.value

    if as_json:
        click.echo(json.dumps(
            [chunk.model_dump(by_alias=True) for chunk in list_chunks(document)],
            indent=2,
        ))
        return

    groups = chunks_by_parent(document)
    if not groups:
        echo_warning("No chunks in this stats file; use commands without --chunk")
        return

    tree = Tree(f"📦 [bold]{escape(stats_file)}[/bold]")
    for chunk in _top_level(groups):
        _add_chunk(tree, chunk, groups, set())
    console.print(tree)


def _top_level(groups: Dict[Optional[str], List[ChunkInfo]]) -> List[ChunkInfo]:
    """Chunks without parents, or whose parents are not chunks of the document."""
    known = {chunk.id for members in groups.values() for chunk in members}
    top: List[ChunkInfo] = []
    for parent, members in groups.items():
        if parent is None or parent not in known:
            for chunk in members:
                if chunk not in top:
                    top.append(chunk)
    # parents form a cycle
    return top or next(iter(groups.values()))


def _add_chunk(
    branch: Tree,
    chunk: ChunkInfo,
    groups: Dict[Optional[str], List[ChunkInfo]],
    seen: Set[str],
) -> None:
    entry = " [magenta]entry[/magenta]" if chunk.entry else ""
    node = branch.add(
        f"[cyan]{escape(chunk.label)}[/cyan] [dim]{chunk.module_count} modules[/dim]{entry}"
    )
    if chunk.id in seen:
        return
    for child in groups.get(chunk.id, []):
        _add_chunk(node, child, groups, seen | {chunk.id})
