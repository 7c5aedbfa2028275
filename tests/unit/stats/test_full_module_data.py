"""Unit tests for Full Module Data derivation."""

import pytest

from depsize.stats.full_module_data import derive
from depsize.stats.index import build_index


def _by_id(data):
    return build_index(data.extended_modules)


class TestCumulativeSize:
    def test_shared_module_counted_once_under_lowest_requirer(self, abc_stats):
        data = derive(abc_stats, "main", [])
        modules = _by_id(data)

        assert modules["A"].cumulative_size == 18
        assert modules["B"].cumulative_size == 8
        assert modules["C"].cumulative_size == 3
        assert modules["C"].parent == "B"
        assert data.roots == ("A",)

    def test_root_total_equals_sum_of_reachable_sizes(self, webpack_stats):
        data = derive(webpack_stats)

        own_sizes = sum(m.size for m in data.extended_modules)
        assert own_sizes == 1380
        assert data.total_size == own_sizes
        assert sum(_by_id(data)[r].cumulative_size for r in data.roots) == own_sizes

    def test_tie_between_requirers_goes_to_document_order(self, webpack_stats):
        modules = _by_id(derive(webpack_stats))

        # lodash is required by app (depth 1), vendor (depth 1) and lazy (depth 0)
        assert modules["3"].parent == "1"
        assert modules["3"].depth == 2
        assert modules["1"].cumulative_size == 1200
        assert modules["2"].cumulative_size == 50
        assert modules["0"].cumulative_size == 1350

    def test_counts_reflect_all_edges_not_just_tree(self, webpack_stats):
        modules = _by_id(derive(webpack_stats))

        assert modules["3"].required_by == ("1", "2", "4")
        assert modules["3"].required_by_count == 3
        assert modules["0"].requirements_count == 2
        assert modules["2"].children == ()


class TestChunkScope:
    def test_chunk_pulls_in_required_modules(self, abc_stats):
        data = derive(abc_stats, "main")
        assert [m.id for m in data.extended_modules] == ["A", "B", "C"]

    def test_chunk_membership_from_module_chunks(self, webpack_stats):
        data = derive(webpack_stats, 0)
        assert {m.id for m in data.extended_modules} == {"0", "1", "2", "3"}
        assert data.total_size == 1350

    def test_lazy_chunk(self, webpack_stats):
        data = derive(webpack_stats, "1")
        modules = _by_id(data)

        assert data.roots == ("4",)
        assert modules["3"].parent == "4"
        assert modules["4"].cumulative_size == 1030

    def test_counts_stay_inside_chunk(self, webpack_stats):
        modules = _by_id(derive(webpack_stats, "1"))

        # app and vendor require lodash too, but live in chunk 0
        assert modules["3"].required_by == ("4",)
        assert modules["3"].required_by_count == 1

    def test_unknown_chunk_yields_empty_tree(self, abc_stats):
        data = derive(abc_stats, "nope")
        assert data.is_empty
        assert data.roots == ()

    def test_empty_chunk_yields_empty_tree(self, abc_stats):
        abc_stats["chunks"].append({"id": "empty", "modules": []})
        assert derive(abc_stats, "empty").is_empty


class TestBlacklist:
    def test_direct_edge_keeps_shared_module(self, abc_stats):
        data = derive(abc_stats, "main", ["B"])
        modules = _by_id(data)

        assert set(modules) == {"A", "C"}
        assert modules["C"].parent == "A"
        assert modules["A"].cumulative_size == 13
        assert modules["A"].requires == ("C",)

    def test_module_only_reachable_through_excluded_is_pruned(self):
        document = {
            "modules": [
                {"id": "A", "size": 10, "requires": ["B"]},
                {"id": "B", "size": 5, "requires": ["C"]},
                {"id": "C", "size": 3},
            ],
        }
        data = derive(document, None, ["B"])
        assert [m.id for m in data.extended_modules] == ["A"]
        assert data.total_size == 10

    def test_excluding_root_empties_tree(self, abc_stats):
        assert derive(abc_stats, "main", ["A"]).is_empty

    def test_ids_compared_as_text(self, webpack_stats):
        data = derive(webpack_stats, 0, [1])
        modules = _by_id(data)

        assert "1" not in modules
        assert modules["3"].parent == "2"
        assert modules["0"].cumulative_size == 1150

    def test_duplicate_entries_are_harmless(self, abc_stats):
        assert derive(abc_stats, "main", ["B", "B"]) == derive(abc_stats, "main", ["B"])

    def test_round_trip_restores_tree(self, abc_stats):
        before = derive(abc_stats, "main", [])
        derive(abc_stats, "main", ["B"])
        assert derive(abc_stats, "main", []) == before


class TestMalformedInput:
    @pytest.mark.parametrize("document", [None, [], "stats", {}, {"modules": "x"}])
    def test_unusable_documents_yield_empty_tree(self, document):
        assert derive(document).is_empty

    def test_missing_fields_degrade(self):
        document = {
            "modules": [
                {"id": 1, "size": "12"},
                {"name": "no id"},
                "garbage",
                {"id": 2, "name": "two", "size": None, "requires": [1, 99]},
            ],
            "chunks": [{"id": 7}],
        }
        data = derive(document)
        modules = _by_id(data)

        assert set(modules) == {"1", "2"}
        assert modules["1"].name == "1"
        assert modules["1"].parent == "2"
        assert modules["2"].cumulative_size == 12
        assert derive(document, 7).is_empty

    def test_cycle_without_entry_terminates(self):
        document = {
            "modules": [
                {"id": "X", "size": 1, "requires": ["Y"]},
                {"id": "Y", "size": 2, "requires": ["X"]},
            ],
        }
        data = derive(document)
        modules = _by_id(data)

        assert data.roots == ("X",)
        assert modules["Y"].parent == "X"
        assert modules["X"].cumulative_size == 3
        assert modules["X"].required_by == ("Y",)

    def test_cycle_below_entry_terminates(self):
        document = {
            "modules": [
                {"id": "E", "size": 1, "requires": ["X"]},
                {"id": "X", "size": 2, "requires": ["Y"]},
                {"id": "Y", "size": 4, "requires": ["X"]},
            ],
        }
        data = derive(document)
        modules = _by_id(data)

        assert data.roots == ("E",)
        assert modules["Y"].parent == "X"
        assert modules["E"].cumulative_size == 7

    def test_children_mirror_parents(self, abc_stats):
        modules = _by_id(derive(abc_stats, "main"))

        assert modules["A"].children == ("B",)
        assert modules["B"].children == ("C",)
        assert modules["C"].children == ()
        for record in modules.values():
            for child in record.children:
                assert modules[child].parent == record.id


def _chain(length):
    return {
        "modules": [
            {"id": i, "name": f"./m{i}.js", "size": 1, "requires": [i + 1]}
            for i in range(length)
        ],
    }


class TestDeepChains:
    def test_long_chain_derives(self):
        data = derive(_chain(1000))
        modules = _by_id(data)

        assert data.roots == ("0",)
        assert modules["0"].cumulative_size == 1000
        assert modules["999"].depth == 999

    def test_equality_on_long_chain(self):
        assert derive(_chain(1000)) == derive(_chain(1000))
        assert derive(_chain(1000), None, ["500"]) != derive(_chain(1000))

    def test_dump_on_long_chain(self):
        dumped = derive(_chain(1000)).model_dump(by_alias=True)
        assert len(dumped["extendedModules"]) == 1000
        assert dumped["totalSize"] == 1000
