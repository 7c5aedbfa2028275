"""
Action catalog.

Each action is a frozen pydantic model tagged by ``type``. The tags and
the wire names of payload fields (``moduleID``, ``chunkId``, ...) are the
ones UI and loader collaborators dispatch as JSON, so plain dicts can be
turned into actions with ``parse_action``.
"""

import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError

from ..core.types import ExpandMode, FrozenModel, SortableField

logger = logging.getLogger(__name__)

ModuleID = Union[str, int]
ChunkID = Union[str, int]


class DiscoveredDataPaths(FrozenModel):
    type: Literal["discoveredDataPaths"] = "discoveredDataPaths"
    paths: List[str]


class PickDataPath(FrozenModel):
    type: Literal["pickDataPath"] = "pickDataPath"
    path: str


class RequestedDataAtPath(FrozenModel):
    type: Literal["requestedDataAtPath"] = "requestedDataAtPath"
    path: str


class LoadedStatsAtPath(FrozenModel):
    type: Literal["loadedStatsAtPath"] = "loadedStatsAtPath"
    path: str
    stats: Any


class ErroredAtPath(FrozenModel):
    type: Literal["erroredAtPath"] = "erroredAtPath"
    path: str
    error: Any = None


class OnSorted(FrozenModel):
    type: Literal["onSorted"] = "onSorted"
    field: SortableField


class OnFiltered(FrozenModel):
    type: Literal["onFiltered"] = "onFiltered"
    changes: Dict[str, str]


class OnPickedChunk(FrozenModel):
    type: Literal["onPickedChunk"] = "onPickedChunk"
    chunk_id: ChunkID


class OnRemoveModule(FrozenModel):
    type: Literal["onRemoveModule"] = "onRemoveModule"
    module_id: ModuleID = Field(alias="moduleID")


class OnIncludeModule(FrozenModel):
    type: Literal["onIncludeModule"] = "onIncludeModule"
    module_id: ModuleID = Field(alias="moduleID")


class ChangeExpandRecordsMode(FrozenModel):
    type: Literal["changeExpandRecordsMode"] = "changeExpandRecordsMode"
    mode: ExpandMode


class OnExpandRecords(FrozenModel):
    type: Literal["onExpandRecords"] = "onExpandRecords"
    module_id: ModuleID = Field(alias="moduleID")


class OnCollapseRecords(FrozenModel):
    type: Literal["onCollapseRecords"] = "onCollapseRecords"
    module_id: ModuleID = Field(alias="moduleID")


class OnFocusChanged(FrozenModel):
    type: Literal["onFocusChanged"] = "onFocusChanged"
    element_id: Optional[str] = Field(default=None, alias="elementID")


Action = Annotated[
    Union[
        DiscoveredDataPaths,
        PickDataPath,
        RequestedDataAtPath,
        LoadedStatsAtPath,
        ErroredAtPath,
        OnSorted,
        OnFiltered,
        OnPickedChunk,
        OnRemoveModule,
        OnIncludeModule,
        ChangeExpandRecordsMode,
        OnExpandRecords,
        OnCollapseRecords,
        OnFocusChanged,
    ],
    Field(discriminator="type"),
]

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(Action)


def parse_action(data: Any) -> Optional[Any]:
    """
    Turn a dict such as ``{"type": "onRemoveModule", "moduleID": 3}``
    into an action model. Returns None for unknown or malformed input.
    """
    try:
        return _ACTION_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.debug(f"Ignoring unrecognized action {data!r:.80}: {e.error_count()} error(s)")
        return None
