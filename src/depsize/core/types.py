"""
Core type definitions for depsize.

Every model here is frozen: derived data and state are replaced
wholesale, never mutated. Field names are snake_case in Python and
camelCase on the wire (``model_dump(by_alias=True)``), matching the
keys UI collaborators already send.
"""

from enum import StrEnum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DataPathStatus(StrEnum):
    """Load status of a stats document path."""
    UNKNOWN = "unknown"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


class ExpandMode(StrEnum):
    """How tree rows are expanded."""
    MANUAL = "manual"
    EXPAND_ALL = "expand-all"
    COLLAPSE_ALL = "collapse-all"


class SortDirection(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


class SortableField(StrEnum):
    """Module record fields a table can be sorted by."""
    NAME = "name"
    SIZE = "size"
    CUMULATIVE_SIZE = "cumulativeSize"
    REQUIRED_BY_COUNT = "requiredByCount"
    REQUIREMENTS_COUNT = "requirementsCount"


class FrozenModel(BaseModel):
    """Base for immutable models with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ModuleRecord(FrozenModel):
    """
    A module as it appears in one derived tree.

    ``parent`` and ``children`` are the display tree edges. ``requires``
    and ``required_by`` hold every surviving edge of the requirement graph,
    so a module shared by several requirers still reports all of them.
    """
    id: str
    name: str
    size: float = 0
    cumulative_size: float = 0
    parent: Optional[str] = None
    children: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    required_by: Tuple[str, ...] = ()
    depth: int = 0

    @property
    def requirements_count(self) -> int:
        return len(self.requires)

    @property
    def required_by_count(self) -> int:
        return len(self.required_by)

    @property
    def is_collapsible(self) -> bool:
        """Records with children can be toggled open or closed."""
        return bool(self.children)


class FullModuleData(FrozenModel):
    """
    Result of one derivation.

    Attributes:
        roots: Root module ids in discovery order.
        extended_modules: Every surviving record, in document order. The
            display tree is ``roots`` plus each record's ``children``.
        total_size: Sum of the roots' cumulative sizes.
    """
    roots: Tuple[str, ...] = ()
    extended_modules: Tuple[ModuleRecord, ...] = ()
    total_size: float = 0

    @property
    def is_empty(self) -> bool:
        return not self.extended_modules


class FilterProps(FrozenModel):
    """
    Filter criteria as typed by the user.

    Values stay raw text so half-typed numbers survive; they are parsed
    when the predicate runs.
    """
    module_name: str = ""
    cumulative_size_min: str = ""
    cumulative_size_max: str = ""
    required_by_count_min: str = ""
    required_by_count_max: str = ""
    requirements_count_min: str = ""
    requirements_count_max: str = ""


class SortProps(FrozenModel):
    field: SortableField = SortableField.CUMULATIVE_SIZE
    direction: SortDirection = SortDirection.DESC


class ChunkInfo(FrozenModel):
    """Summary of one chunk entry of a stats document."""
    id: str
    names: Tuple[str, ...] = ()
    parents: Tuple[str, ...] = ()
    module_count: int = 0
    entry: bool = False

    @property
    def label(self) -> str:
        if self.names:
            return f"{self.id} ({', '.join(self.names)})"
        return self.id

