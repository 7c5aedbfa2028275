"""
Full Module Data derivation.

Turns a raw stats document into the display tree for one chunk:

1. Universe: the chunk's members plus everything they require
   (the whole document when no chunk is selected).
2. Roots: one module per source component of the universe, i.e. modules
   nobody in the universe requires; a cycle nobody else requires
   contributes its first module in document order.
3. Exclusion: blacklisted modules are dropped, and so is everything no
   longer reachable from the remaining roots.
4. Tree shaping: a depth-first search from the roots drops back edges.
   Each module's depth is its longest path from a root in what remains,
   and its tree parent is the requirer with the greatest depth (ties go
   to document order). Shared modules therefore hang under the lowest
   module that requires them.
5. Cumulative size: own size plus the cumulative sizes of tree children,
   so each surviving module is counted exactly once.

Graph work is done with rustworkx; node payloads are module ids.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import rustworkx as rx
from rustworkx.visit import DFSVisitor

from ..core.types import FullModuleData, ModuleRecord
from .raw import chunk_members, normalize_id, read_chunks, read_modules, requirement_graph

logger = logging.getLogger(__name__)


class _DepthFirstOrder(DFSVisitor):
    """Records back edges and the post-order of a depth-first search."""

    def __init__(self):
        self.back_edges: Set[Tuple[int, int]] = set()
        self.finish_order: List[int] = []

    def back_edge(self, edge):
        source, target, _ = edge
        self.back_edges.add((source, target))

    def finish_vertex(self, v, t):
        self.finish_order.append(v)


def _digraph(
    ids: Iterable[str],
    requirements: Dict[str, List[str]],
) -> Tuple[rx.PyDiGraph, Dict[str, int]]:
    """Build the requirement graph induced by ``ids``."""
    graph = rx.PyDiGraph()
    index: Dict[str, int] = {}
    for module_id in ids:
        index[module_id] = graph.add_node(module_id)
    graph.add_edges_from_no_data([
        (index[source], index[target])
        for source in index
        for target in requirements.get(source, [])
        if target in index
    ])
    return graph, index


def _reachable(
    graph: rx.PyDiGraph,
    index: Dict[str, int],
    sources: Iterable[str],
) -> Set[str]:
    """Ids reachable from ``sources``, the sources included."""
    sources = [s for s in sources if s in index]
    if not sources:
        return set()
    anchor = graph.add_node(None)
    graph.add_edges_from_no_data([(anchor, index[s]) for s in sources])
    try:
        return {graph[i] for i in rx.descendants(graph, anchor)}
    finally:
        graph.remove_node(anchor)


def _roots(graph: rx.PyDiGraph, order: Dict[str, int]) -> List[str]:
    """First module (document order) of every component nobody else requires."""
    roots = []
    for component in rx.strongly_connected_components(graph):
        members = set(component)
        required_from_outside = any(
            source not in members
            for node in component
            for source in graph.predecessor_indices(node)
        )
        if not required_from_outside:
            roots.append(min((graph[i] for i in component), key=order.__getitem__))
    return sorted(roots, key=order.__getitem__)


def _universe(
    document: Any,
    chunk_id: Optional[str],
    order: Dict[str, int],
    requirements: Dict[str, List[str]],
    modules: list,
) -> List[str]:
    if chunk_id is None:
        return list(order)
    members = chunk_members(chunk_id, read_chunks(document), modules)
    graph, index = _digraph(order, requirements)
    reached = _reachable(graph, index, members)
    return sorted(reached, key=order.__getitem__)


def derive(
    document: Any,
    chunk_id: Any = None,
    blacklist: Iterable[Any] = (),
) -> FullModuleData:
    """
    Derive the annotated module tree for one chunk of a stats document.

    Never raises for malformed documents, unknown chunks or cyclic
    requirement graphs; those yield empty or partial trees.

    Args:
        document: The raw stats document.
        chunk_id: Chunk to restrict to, or None for the whole document.
        blacklist: Module ids to exclude. Compared as text.

    Returns:
        FullModuleData: Roots, nested tree and flat records.
    """
    modules = read_modules(document)
    by_id = {m.id: m for m in modules}
    order = {m.id: i for i, m in enumerate(modules)}
    requirements = requirement_graph(modules)

    chunk_key = normalize_id(chunk_id)
    universe = _universe(document, chunk_key, order, requirements, modules)

    graph, _ = _digraph(universe, requirements)
    roots = _roots(graph, order)

    blocked = {str(module_id) for module_id in blacklist}
    allowed = [m for m in universe if m not in blocked]
    graph, index = _digraph(allowed, requirements)
    survivors = _reachable(graph, index, [r for r in roots if r not in blocked])
    surviving = sorted(survivors, key=order.__getitem__)
    roots = [r for r in roots if r in survivors]

    logger.debug(
        f"Derived chunk={chunk_key!r}: {len(modules)} modules, "
        f"{len(universe)} in scope, {len(blocked)} excluded, {len(surviving)} surviving"
    )
    if not surviving:
        return FullModuleData()

    graph, index = _digraph(surviving, requirements)
    visitor = _DepthFirstOrder()
    rx.dfs_search(graph, [index[r] for r in roots], visitor)

    depth: Dict[str, int] = {}
    parent: Dict[str, Optional[str]] = {}
    for node in reversed(visitor.finish_order):
        requirers = [
            graph[source]
            for source in graph.predecessor_indices(node)
            if (source, node) not in visitor.back_edges
        ]
        module_id = graph[node]
        if not requirers:
            depth[module_id] = 0
            parent[module_id] = None
            continue
        chosen = max(requirers, key=lambda r: (depth[r], -order[r]))
        depth[module_id] = depth[chosen] + 1
        parent[module_id] = chosen

    children: Dict[str, List[str]] = {module_id: [] for module_id in surviving}
    for module_id in surviving:
        if parent[module_id] is not None:
            children[parent[module_id]].append(module_id)

    cumulative: Dict[str, float] = {}
    for node in visitor.finish_order:
        module_id = graph[node]
        cumulative[module_id] = by_id[module_id].size + sum(
            cumulative[child] for child in children[module_id]
        )

    # Counts cover surviving edges of this scope only: a module shared with
    # another chunk reports just the requirers inside the selected one.
    required_by: Dict[str, List[str]] = {module_id: [] for module_id in surviving}
    for module_id in surviving:
        for target in requirements[module_id]:
            if target in required_by:
                required_by[target].append(module_id)

    records = tuple(
        ModuleRecord(
            id=module_id,
            name=by_id[module_id].name,
            size=by_id[module_id].size,
            cumulative_size=cumulative[module_id],
            parent=parent[module_id],
            children=tuple(children[module_id]),
            requires=tuple(t for t in requirements[module_id] if t in survivors),
            required_by=tuple(required_by[module_id]),
            depth=depth[module_id],
        )
        for module_id in surviving
    )
    return FullModuleData(
        roots=tuple(roots),
        extended_modules=records,
        total_size=sum(cumulative[r] for r in roots),
    )
