"""
Sort Comparator Engine.
"""

from functools import cmp_to_key
from typing import Any, Iterable, List

from ..core.types import ModuleRecord, SortableField, SortDirection, SortProps

_SORT_KEYS = {
    SortableField.NAME: lambda r: r.name.casefold(),
    SortableField.SIZE: lambda r: r.size,
    SortableField.CUMULATIVE_SIZE: lambda r: r.cumulative_size,
    SortableField.REQUIRED_BY_COUNT: lambda r: r.required_by_count,
    SortableField.REQUIREMENTS_COUNT: lambda r: r.requirements_count,
}


def sort_key(record: ModuleRecord, field: SortableField) -> Any:
    return _SORT_KEYS[SortableField(field)](record)


def compare(
    a: ModuleRecord,
    b: ModuleRecord,
    field: SortableField,
    direction: SortDirection,
) -> int:
    """
    Three-way comparison of two records on one field.

    Returns 0 for equal keys so a stable sort keeps input order.
    """
    left, right = sort_key(a, field), sort_key(b, field)
    result = (left > right) - (left < right)
    return -result if direction == SortDirection.DESC else result


def sort_modules(records: Iterable[ModuleRecord], sort: SortProps) -> List[ModuleRecord]:
    """Sort records by ``sort``; ties keep their relative input order."""
    return sorted(
        records,
        key=cmp_to_key(lambda a, b: compare(a, b, sort.field, sort.direction)),
    )
