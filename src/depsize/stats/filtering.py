"""
Filter Predicate Engine.

Range bounds arrive as raw text from input fields. Text that does not
parse as a finite number leaves that side of the range unconstrained.
Name matching is a case-insensitive substring test.
"""

import math
from typing import Callable, Iterable, List, Optional, Tuple

from ..core.types import FilterProps, ModuleRecord

# (attribute on ModuleRecord, min field, max field)
NUMERIC_RANGES: Tuple[Tuple[str, str, str], ...] = (
    ("cumulative_size", "cumulative_size_min", "cumulative_size_max"),
    ("required_by_count", "required_by_count_min", "required_by_count_max"),
    ("requirements_count", "requirements_count_min", "requirements_count_max"),
)


def parse_bound(text: Optional[str]) -> Optional[float]:
    """Parse a range bound, returning None when it should be ignored."""
    if text is None:
        return None
    try:
        value = float(str(text).strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def matches(record: ModuleRecord, criteria: FilterProps) -> bool:
    """Check whether a module record satisfies every filter criterion."""
    needle = criteria.module_name.strip().casefold()
    if needle and needle not in record.name.casefold():
        return False

    for attribute, min_field, max_field in NUMERIC_RANGES:
        value = getattr(record, attribute)
        low = parse_bound(getattr(criteria, min_field))
        if low is not None and value < low:
            return False
        high = parse_bound(getattr(criteria, max_field))
        if high is not None and value > high:
            return False
    return True


def compile_filter(criteria: FilterProps) -> Callable[[ModuleRecord], bool]:
    """Bind criteria into a single-argument predicate."""
    return lambda record: matches(record, criteria)


def filter_modules(
    records: Iterable[ModuleRecord],
    criteria: FilterProps,
) -> List[ModuleRecord]:
    return [record for record in records if matches(record, criteria)]
