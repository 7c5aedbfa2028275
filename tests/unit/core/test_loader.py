"""
Unit tests for stats discovery and loading.
"""

from unittest.mock import patch

import pytest

from depsize.core.exceptions import ChunkNotFoundError, StatsLoadError
from depsize.core.types import DataPathStatus
from depsize.loader import discover_stats_files, load_into_store, open_session, read_stats
from depsize.state.store import Store


class TestDiscoverStatsFiles:
    """Test finding stats documents on disk."""

    def test_finds_matching_files_sorted(self, tmp_path):
        (tmp_path / "build").mkdir()
        (tmp_path / "build" / "stats.json").write_text("{}")
        (tmp_path / "nested" / "a").mkdir(parents=True)
        (tmp_path / "nested" / "a" / "webpack-stats.json").write_text("{}")
        (tmp_path / "other.json").write_text("{}")

        found = discover_stats_files(tmp_path)

        assert found == [
            str(tmp_path / "build" / "stats.json"),
            str(tmp_path / "nested" / "a" / "webpack-stats.json"),
        ]

    def test_skips_ignored_directories(self, tmp_path):
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "node_modules" / "pkg" / "stats.json").write_text("{}")
        assert discover_stats_files(tmp_path) == []

    def test_custom_patterns(self, tmp_path):
        (tmp_path / "bundle.json").write_text("{}")
        (tmp_path / "stats.json").write_text("{}")
        assert discover_stats_files(tmp_path, ["bundle*.json"]) == [str(tmp_path / "bundle.json")]

    def test_file_path_returned_as_is(self, stats_file):
        assert discover_stats_files(stats_file) == [str(stats_file)]

    def test_missing_directory(self, tmp_path):
        assert discover_stats_files(tmp_path / "nope") == []


class TestReadStats:
    """Test decoding a single stats document."""

    def test_ok(self, stats_file, webpack_stats):
        result = read_stats(stats_file)
        assert result.is_ok()
        assert result.unwrap() == webpack_stats

    def test_missing_file(self, tmp_path):
        result = read_stats(tmp_path / "missing.json")
        assert result.is_err()
        assert result.error.reason == "file not found"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{\n  "modules": [\n')
        result = read_stats(path)
        assert result.is_err()
        assert result.error.reason.startswith("invalid JSON at line")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        result = read_stats(path)
        assert result.error.reason == "expected a JSON object"

    def test_too_large(self, stats_file):
        with patch("depsize.loader.MAX_STATS_FILE_BYTES", 10):
            result = read_stats(stats_file)
        assert result.error.reason == "file too large"

    def test_unwrap_raises_error(self, tmp_path):
        with pytest.raises(StatsLoadError):
            read_stats(tmp_path / "missing.json").unwrap()


class TestLoadIntoStore:
    """Test the request/settle dispatch sequence."""

    def test_loads_and_marks_ready(self, stats_file, webpack_stats):
        store = Store()
        state = load_into_store(store, str(stats_file))
        assert state.status_of(str(stats_file)) == DataPathStatus.READY
        assert state.documents[str(stats_file)] == webpack_stats

    def test_error_marks_path(self, tmp_path):
        store = Store()
        path = str(tmp_path / "missing.json")
        state = load_into_store(store, path)
        assert state.status_of(path) == DataPathStatus.ERROR
        assert path not in state.documents

    def test_dispatch_sequence(self, stats_file):
        store = Store()
        statuses = []
        store.subscribe(lambda s: statuses.append(s.status_of(str(stats_file))))
        load_into_store(store, str(stats_file))
        assert statuses == [DataPathStatus.LOADING, DataPathStatus.READY]

    def test_ready_path_not_read_again(self, stats_file):
        store = Store()
        with patch("depsize.loader.read_stats", wraps=read_stats) as mock_read:
            load_into_store(store, str(stats_file))
            load_into_store(store, str(stats_file))
        assert mock_read.call_count == 1


class TestOpenSession:
    """Test opening a document with chunk and exclusions applied."""

    def test_whole_bundle(self, stats_file):
        state = open_session(str(stats_file)).get_state()
        data = state.calculated_full_module_data
        assert state.selected_filename == str(stats_file)
        assert state.selected_chunk_id is None
        assert data.roots == ("0", "4")
        assert data.total_size == 1380

    def test_chunk(self, stats_file):
        state = open_session(str(stats_file), chunk_id="0").get_state()
        data = state.calculated_full_module_data
        sizes = {m.id: m.cumulative_size for m in data.extended_modules}
        assert sizes == {"0": 1350, "1": 1200, "2": 50, "3": 1000}

    def test_lazy_chunk_includes_shared_module(self, stats_file):
        state = open_session(str(stats_file), chunk_id="1").get_state()
        data = state.calculated_full_module_data
        assert data.roots == ("4",)
        assert data.total_size == 1030

    def test_exclude(self, stats_file):
        state = open_session(str(stats_file), chunk_id="0", exclude=["1"]).get_state()
        records = {m.id: m for m in state.calculated_full_module_data.extended_modules}
        assert set(records) == {"0", "2", "3"}
        assert records["3"].parent == "2"
        assert records["0"].cumulative_size == 1150
        assert state.blacklisted_module_ids == ("1",)

    def test_unknown_chunk(self, stats_file):
        with pytest.raises(ChunkNotFoundError):
            open_session(str(stats_file), chunk_id="9")

    def test_load_failure_raises(self, tmp_path):
        store = Store()
        path = str(tmp_path / "missing.json")
        with pytest.raises(StatsLoadError) as exc_info:
            open_session(path, store=store)
        assert exc_info.value.path == path
        assert store.get_state().status_of(path) == DataPathStatus.ERROR

    def test_reuses_loaded_store(self, stats_file):
        store = open_session(str(stats_file))
        with patch("depsize.loader.read_stats") as mock_read:
            open_session(str(stats_file), chunk_id="1", store=store)
        mock_read.assert_not_called()
        assert store.get_state().selected_chunk_id == "1"
