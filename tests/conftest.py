"""Shared fixtures: small stats documents in both supported shapes."""

import json

import pytest


@pytest.fixture
def abc_stats():
    """A requires B and C, B requires C; one chunk holding A."""
    return {
        "modules": [
            {"id": "A", "name": "./a.js", "size": 10, "requires": ["B", "C"]},
            {"id": "B", "name": "./b.js", "size": 5, "requires": ["C"]},
            {"id": "C", "name": "./c.js", "size": 3, "requires": []},
        ],
        "chunks": [{"id": "main", "modules": ["A"]}],
    }


@pytest.fixture
def webpack_stats():
    """
    Webpack shaped stats: numeric ids, edges via ``reasons``.

        0 index  -> 1 app -> 3 lodash
                 -> 2 vendor -> 3 lodash
        4 lazy (chunk 1, parent chunk 0) -> 3 lodash
    """
    return {
        "modules": [
            {"id": 0, "name": "./src/index.js", "size": 100, "chunks": [0],
             "reasons": [{"moduleId": None}]},
            {"id": 1, "name": "./src/app.js", "size": 200, "chunks": [0],
             "reasons": [{"moduleId": 0}]},
            {"id": 2, "name": "./src/vendor.js", "size": 50, "chunks": [0],
             "reasons": [{"moduleId": 0}]},
            {"id": 3, "name": "./node_modules/lodash/lodash.js", "size": 1000,
             "chunks": [0, 1],
             "reasons": [{"moduleId": 1}, {"moduleId": 2}, {"moduleId": 4}]},
            {"id": 4, "name": "./src/lazy.js", "size": 30, "chunks": [1],
             "reasons": []},
        ],
        "chunks": [
            {"id": 0, "names": ["main"], "parents": [], "entry": True},
            {"id": 1, "names": ["lazy"], "parents": [0]},
        ],
    }


@pytest.fixture
def stats_file(tmp_path, webpack_stats):
    path = tmp_path / "stats.json"
    path.write_text(json.dumps(webpack_stats))
    return path


@pytest.fixture
def abc_stats_file(tmp_path, abc_stats):
    path = tmp_path / "abc-stats.json"
    path.write_text(json.dumps(abc_stats))
    return path
