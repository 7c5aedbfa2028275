"""Unit tests for the module index and collapsible-ancestor lookup."""

from depsize.core.types import ModuleRecord
from depsize.stats.index import build_index, find_collapsible_ancestor


def _record(module_id, parent=None, children=()):
    return ModuleRecord(id=module_id, name=module_id, parent=parent, children=children)


class TestBuildIndex:
    def test_keys_by_id(self):
        index = build_index([_record("a"), _record("b")])
        assert list(index) == ["a", "b"]

    def test_last_write_wins(self):
        first = _record("a")
        second = _record("a", parent="z")
        assert build_index([first, second])["a"] is second


class TestFindCollapsibleAncestor:
    def test_returns_parent_with_children(self):
        index = build_index([
            _record("root", children=("mid",)),
            _record("mid", parent="root", children=("leaf",)),
            _record("leaf", parent="mid"),
        ])
        assert find_collapsible_ancestor(index, "leaf").id == "mid"
        assert find_collapsible_ancestor(index, "mid").id == "root"

    def test_root_has_no_ancestor(self):
        index = build_index([_record("root", children=("leaf",)), _record("leaf", parent="root")])
        assert find_collapsible_ancestor(index, "root") is None

    def test_unknown_id(self):
        assert find_collapsible_ancestor({}, "ghost") is None

    def test_skips_ancestors_without_children(self):
        index = build_index([
            _record("top", children=("odd",)),
            _record("odd", parent="top"),
            _record("leaf", parent="odd"),
        ])
        assert find_collapsible_ancestor(index, "leaf").id == "top"

    def test_cyclic_parent_chain_terminates(self):
        index = build_index([_record("a", parent="b"), _record("b", parent="a")])
        assert find_collapsible_ancestor(index, "a") is None

    def test_accepts_numeric_ids(self):
        index = build_index([_record("1", children=("2",)), _record("2", parent="1")])
        assert find_collapsible_ancestor(index, 2).id == "1"
