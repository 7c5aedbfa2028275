"""
State Reducer.

``reduce(state, action)`` applies one action and returns a new state.
It is pure: the previous state is never mutated, nothing is raised for
a well-formed action, and unrecognized actions return ``state`` as is.

After every transition the derived module tree is refreshed, but only
when one of its inputs (documents, selected file, selected chunk,
blacklist) actually changed. Otherwise the previous tree is carried
forward by reference so consumers can skip work with an ``is`` check.
"""

import logging
from typing import Any, Callable, Dict, Optional

from ..core.types import DataPathStatus, ExpandMode, FilterProps, SortDirection
from ..stats.full_module_data import derive
from ..stats.index import build_index, find_collapsible_ancestor
from .actions import (
    ChangeExpandRecordsMode,
    DiscoveredDataPaths,
    ErroredAtPath,
    LoadedStatsAtPath,
    OnCollapseRecords,
    OnExpandRecords,
    OnFiltered,
    OnFocusChanged,
    OnIncludeModule,
    OnPickedChunk,
    OnRemoveModule,
    OnSorted,
    PickDataPath,
    RequestedDataAtPath,
    parse_action,
)
from .models import INITIAL_STATE, State

logger = logging.getLogger(__name__)

# Resets applied whenever the module scope (file or chunk) changes.
_MODULE_SCOPE_RESET = {
    "blacklisted_module_ids": (),
    "expand_mode": ExpandMode.COLLAPSE_ALL,
    "expanded_records": frozenset(),
    "currently_focused_element_id": None,
}

_FILTER_FIELDS: Dict[str, str] = {
    key: name
    for name, info in FilterProps.model_fields.items()
    for key in (name, info.alias)
    if key
}


def _discovered_data_paths(state: State, action: DiscoveredDataPaths) -> State:
    data_paths = {path: DataPathStatus.UNKNOWN for path in action.paths}
    data_paths.update(state.data_paths)
    return state.model_copy(update={"data_paths": data_paths})


def _pick_data_path(state: State, action: PickDataPath) -> State:
    data_paths = {action.path: DataPathStatus.UNKNOWN}
    data_paths.update(state.data_paths)
    return state.model_copy(update={
        "data_paths": data_paths,
        "selected_filename": action.path,
        "selected_chunk_id": None,
        **_MODULE_SCOPE_RESET,
    })


def _requested_data_at_path(state: State, action: RequestedDataAtPath) -> State:
    current = state.data_paths.get(action.path)
    status = DataPathStatus.READY if current == DataPathStatus.READY else DataPathStatus.LOADING
    return state.model_copy(update={
        "data_paths": {**state.data_paths, action.path: status},
    })


def _loaded_stats_at_path(state: State, action: LoadedStatsAtPath) -> State:
    return state.model_copy(update={
        "data_paths": {**state.data_paths, action.path: DataPathStatus.READY},
        "documents": {**state.documents, action.path: action.stats},
    })


def _errored_at_path(state: State, action: ErroredAtPath) -> State:
    logger.debug(f"Load failed for {action.path}: {action.error}")
    return state.model_copy(update={
        "data_paths": {**state.data_paths, action.path: DataPathStatus.ERROR},
    })


def _on_sorted(state: State, action: OnSorted) -> State:
    if state.sort.field == action.field:
        direction = (
            SortDirection.DESC if state.sort.direction == SortDirection.ASC
            else SortDirection.ASC
        )
    else:
        direction = SortDirection.DESC
    return state.model_copy(update={
        "sort": state.sort.model_copy(update={"field": action.field, "direction": direction}),
    })


def _on_filtered(state: State, action: OnFiltered) -> State:
    changes = {
        _FILTER_FIELDS[key]: str(value)
        for key, value in action.changes.items()
        if key in _FILTER_FIELDS
    }
    return state.model_copy(update={"filters": state.filters.model_copy(update=changes)})


def _on_picked_chunk(state: State, action: OnPickedChunk) -> State:
    return state.model_copy(update={
        "selected_chunk_id": str(action.chunk_id),
        **_MODULE_SCOPE_RESET,
    })


def _on_remove_module(state: State, action: OnRemoveModule) -> State:
    return state.model_copy(update={
        "blacklisted_module_ids": state.blacklisted_module_ids + (str(action.module_id),),
    })


def _on_include_module(state: State, action: OnIncludeModule) -> State:
    module_id = str(action.module_id)
    return state.model_copy(update={
        "blacklisted_module_ids": tuple(
            m for m in state.blacklisted_module_ids if str(m) != module_id
        ),
    })


def _change_expand_records_mode(state: State, action: ChangeExpandRecordsMode) -> State:
    return state.model_copy(update={"expand_mode": action.mode})


def _on_expand_records(state: State, action: OnExpandRecords) -> State:
    return state.model_copy(update={
        "expand_mode": ExpandMode.MANUAL,
        "expanded_records": state.expanded_records | {str(action.module_id)},
    })


def _on_collapse_records(state: State, action: OnCollapseRecords) -> State:
    expanded = state.expanded_records - {str(action.module_id)}
    return state.model_copy(update={
        "expand_mode": ExpandMode.MANUAL if expanded else ExpandMode.COLLAPSE_ALL,
        "expanded_records": expanded,
    })


def _on_focus_changed(state: State, action: OnFocusChanged) -> State:
    data = state.calculated_full_module_data
    if action.element_id is None or data is None:
        return state.model_copy(update={"currently_focused_element_id": action.element_id})

    ancestor = find_collapsible_ancestor(build_index(data.extended_modules), action.element_id)
    if ancestor is None:
        return state.model_copy(update={"currently_focused_element_id": action.element_id})

    return state.model_copy(update={
        "expand_mode": ExpandMode.MANUAL,
        "expanded_records": state.expanded_records | {ancestor.id},
        "currently_focused_element_id": action.element_id,
    })


_HANDLERS: Dict[type, Callable[[State, Any], State]] = {
    DiscoveredDataPaths: _discovered_data_paths,
    PickDataPath: _pick_data_path,
    RequestedDataAtPath: _requested_data_at_path,
    LoadedStatsAtPath: _loaded_stats_at_path,
    ErroredAtPath: _errored_at_path,
    OnSorted: _on_sorted,
    OnFiltered: _on_filtered,
    OnPickedChunk: _on_picked_chunk,
    OnRemoveModule: _on_remove_module,
    OnIncludeModule: _on_include_module,
    ChangeExpandRecordsMode: _change_expand_records_mode,
    OnExpandRecords: _on_expand_records,
    OnCollapseRecords: _on_collapse_records,
    OnFocusChanged: _on_focus_changed,
}


def handle_action(state: State, action: Any) -> State:
    """Apply ``action`` without touching derived data."""
    if isinstance(action, dict):
        action = parse_action(action)
    handler = _HANDLERS.get(type(action))
    if handler is None:
        logger.debug(f"Unrecognized action: {action!r:.80}")
        return state
    return handler(state, action)


def full_module_data_inputs_changed(old: State, new: State) -> bool:
    """
    Whether the inputs of the derived tree differ between two states.

    The document table and blacklist are compared by identity: every
    transition that changes them builds a new container. File and chunk
    are compared by value.
    """
    return not (
        old.documents is new.documents
        and old.selected_filename == new.selected_filename
        and old.selected_chunk_id == new.selected_chunk_id
        and old.blacklisted_module_ids is new.blacklisted_module_ids
    )


def calculate_full_module_data(old: State, new: State) -> State:
    """Refresh ``calculated_full_module_data`` on ``new`` when needed."""
    document = new.selected_document
    if document is None:
        if new.calculated_full_module_data is None:
            return new
        return new.model_copy(update={"calculated_full_module_data": None})

    if (
        new.calculated_full_module_data is not None
        and not full_module_data_inputs_changed(old, new)
    ):
        return new

    return new.model_copy(update={
        "calculated_full_module_data": derive(
            document,
            new.selected_chunk_id,
            new.blacklisted_module_ids,
        ),
    })


def reduce(state: Optional[State] = None, action: Any = None) -> State:
    """
    Apply one action to the state.

    Args:
        state: Current state, None for ``INITIAL_STATE``.
        action: An action model, or a dict accepted by ``parse_action``.

    Returns:
        State: The next state; ``state`` itself for unrecognized actions.
    """
    if state is None:
        state = INITIAL_STATE
    new_state = handle_action(state, action)
    if new_state is state:
        return state
    return calculate_full_module_data(state, new_state)
