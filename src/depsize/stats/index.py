"""
Module index and tree navigation helpers.
"""

from typing import Dict, Iterable, Optional

from ..core.types import ModuleRecord


def build_index(modules: Iterable[ModuleRecord]) -> Dict[str, ModuleRecord]:
    """
    Build a lookup of records keyed by module id.

    Later records with an already seen id replace earlier ones.
    """
    return {module.id: module for module in modules}


def find_collapsible_ancestor(
    index: Dict[str, ModuleRecord],
    start_id: str,
) -> Optional[ModuleRecord]:
    """
    Find the nearest ancestor of ``start_id`` that can be collapsed.

    Walks ``parent`` links upward, starting at the record's parent, and
    returns the first record that has children. Returns None when the
    start id is unknown, the walk reaches a root, or the walk takes more
    steps than there are records (a cyclic parent chain).

    Args:
        index: Records keyed by id, as built by ``build_index``.
        start_id: Id of the focused module.

    Returns:
        Optional[ModuleRecord]: The ancestor to expand, if any.
    """
    record = index.get(str(start_id))
    if record is None:
        return None

    steps = 0
    parent_id = record.parent
    while parent_id is not None:
        steps += 1
        if steps > len(index):
            return None
        parent = index.get(parent_id)
        if parent is None:
            return None
        if parent.is_collapsible:
            return parent
        parent_id = parent.parent
    return None
