"""Unit tests for the sort comparator engine."""

from depsize.core.types import ModuleRecord, SortableField, SortDirection, SortProps
from depsize.stats.sorting import compare, sort_modules


def _record(module_id, name, size, cumulative, required_by=()):
    return ModuleRecord(
        id=module_id,
        name=name,
        size=size,
        cumulative_size=cumulative,
        required_by=required_by,
    )


A = _record("a", "beta.js", 10, 100, ("x",))
B = _record("b", "Alpha.js", 30, 100)
C = _record("c", "gamma.js", 20, 50, ("x", "y"))


class TestCompare:
    def test_numeric_ascending(self):
        assert compare(A, B, SortableField.SIZE, SortDirection.ASC) == -1
        assert compare(B, A, SortableField.SIZE, SortDirection.ASC) == 1

    def test_direction_flips_sign(self):
        assert compare(A, B, SortableField.SIZE, SortDirection.DESC) == 1

    def test_equal_keys(self):
        assert compare(A, B, SortableField.CUMULATIVE_SIZE, SortDirection.DESC) == 0

    def test_name_ignores_case(self):
        assert compare(B, A, SortableField.NAME, SortDirection.ASC) == -1


class TestSortModules:
    def test_descending_cumulative_is_stable(self):
        ordered = sort_modules([C, A, B], SortProps())
        assert [r.id for r in ordered] == ["a", "b", "c"]

        ordered = sort_modules([C, B, A], SortProps())
        assert [r.id for r in ordered] == ["b", "a", "c"]

    def test_counts(self):
        sort = SortProps(field=SortableField.REQUIRED_BY_COUNT, direction=SortDirection.ASC)
        assert [r.id for r in sort_modules([C, A, B], sort)] == ["b", "a", "c"]

    def test_name_ascending(self):
        sort = SortProps(field=SortableField.NAME, direction=SortDirection.ASC)
        assert [r.id for r in sort_modules([A, C, B], sort)] == ["b", "a", "c"]
