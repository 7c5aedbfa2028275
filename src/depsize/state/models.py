"""
Application state.

``State`` is a frozen value. Transitions build a new one with
``model_copy(update=...)`` and never mutate the mapping fields of the
previous state; they are rebuilt instead.
"""

from typing import Any, Dict, FrozenSet, Optional, Tuple

from pydantic import Field

from ..core.types import (
    DataPathStatus,
    ExpandMode,
    FilterProps,
    FrozenModel,
    FullModuleData,
    SortProps,
)


class State(FrozenModel):
    """
    Everything the UI reads.

    Attributes:
        data_paths: Load status per stats document path.
        selected_filename: Path of the document being explored.
        selected_chunk_id: Chunk being explored, None for the whole bundle.
        blacklisted_module_ids: Excluded module ids, in the order excluded.
        documents: Loaded stats documents keyed by path (``json`` on the wire).
        sort: Active sort field and direction.
        filters: Raw filter text.
        expand_mode: How tree rows are expanded.
        expanded_records: Ids expanded while in manual mode.
        currently_focused_element_id: Id of the focused row, if any.
        calculated_full_module_data: Tree derived from the four inputs
            above it (documents, selected file, chunk, blacklist).
    """
    data_paths: Dict[str, DataPathStatus] = Field(default_factory=dict)
    selected_filename: Optional[str] = None
    selected_chunk_id: Optional[str] = None
    blacklisted_module_ids: Tuple[str, ...] = ()
    documents: Dict[str, Any] = Field(default_factory=dict, alias="json")
    sort: SortProps = SortProps()
    filters: FilterProps = FilterProps()
    expand_mode: ExpandMode = ExpandMode.COLLAPSE_ALL
    expanded_records: FrozenSet[str] = frozenset()
    currently_focused_element_id: Optional[str] = None
    calculated_full_module_data: Optional[FullModuleData] = None

    def status_of(self, path: str) -> DataPathStatus:
        return self.data_paths.get(path, DataPathStatus.UNKNOWN)

    @property
    def selected_document(self) -> Optional[Any]:
        if self.selected_filename is None:
            return None
        return self.documents.get(self.selected_filename)

    def is_expanded(self, module_id: str) -> bool:
        """Whether a tree row shows its children under the current mode."""
        if self.expand_mode == ExpandMode.EXPAND_ALL:
            return True
        if self.expand_mode == ExpandMode.COLLAPSE_ALL:
            return False
        return str(module_id) in self.expanded_records


INITIAL_STATE = State()
