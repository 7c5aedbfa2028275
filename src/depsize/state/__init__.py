"""
Application state: action catalog, pure reducer and store.
"""

from .actions import (
    Action,
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
from .reducer import calculate_full_module_data, full_module_data_inputs_changed, reduce
from .store import Store

__all__ = [
    "Action",
    "ChangeExpandRecordsMode",
    "DiscoveredDataPaths",
    "ErroredAtPath",
    "INITIAL_STATE",
    "LoadedStatsAtPath",
    "OnCollapseRecords",
    "OnExpandRecords",
    "OnFiltered",
    "OnFocusChanged",
    "OnIncludeModule",
    "OnPickedChunk",
    "OnRemoveModule",
    "OnSorted",
    "PickDataPath",
    "RequestedDataAtPath",
    "State",
    "Store",
    "calculate_full_module_data",
    "full_module_data_inputs_changed",
    "parse_action",
    "reduce",
]
