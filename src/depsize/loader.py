"""
Stats Loader.

Finds stats documents on disk and feeds them to a store through the
request/settle action pair:

    requestedDataAtPath  ->  loadedStatsAtPath | erroredAtPath

The reducer never does I/O; everything that touches the filesystem
lives here.
"""

import fnmatch
import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .config import MAX_STATS_FILE_BYTES, STATS_FILE_PATTERNS, is_ignored_directory
from .core.exceptions import ChunkNotFoundError, StatsLoadError
from .core.result import Err, Ok, Result
from .core.types import DataPathStatus
from .state.actions import (
    DiscoveredDataPaths,
    ErroredAtPath,
    LoadedStatsAtPath,
    OnPickedChunk,
    OnRemoveModule,
    PickDataPath,
    RequestedDataAtPath,
)
from .state.models import State
from .state.store import Store
from .stats.chunks import has_chunk

logger = logging.getLogger(__name__)


def discover_stats_files(
    directory: str | Path,
    patterns: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Find stats documents below ``directory``.

    Args:
        directory: Root of the search.
        patterns: File name globs, defaults to ``STATS_FILE_PATTERNS``.

    Returns:
        List[str]: Matching paths, sorted.
    """
    patterns = list(patterns or STATS_FILE_PATTERNS)
    root = Path(directory)
    if root.is_file():
        return [str(root)]
    if not root.is_dir():
        return []

    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not is_ignored_directory(d)]
        for filename in filenames:
            if any(fnmatch.fnmatch(filename, pattern) for pattern in patterns):
                found.append(str(Path(dirpath) / filename))
    return sorted(found)


def read_stats(path: str | Path) -> Result[Any, StatsLoadError]:
    """
    Read and decode a stats document.

    Missing files, oversized files, invalid JSON and documents that are
    not JSON objects come back as ``Err`` rather than raising.
    """
    path = Path(path)
    try:
        if path.stat().st_size > MAX_STATS_FILE_BYTES:
            return Err(StatsLoadError(str(path), "file too large"))
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(StatsLoadError(str(path), "file not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(StatsLoadError(str(path), str(e)))
    except json.JSONDecodeError as e:
        return Err(StatsLoadError(str(path), f"invalid JSON at line {e.lineno}"))

    if not isinstance(data, dict):
        return Err(StatsLoadError(str(path), "expected a JSON object"))
    return Ok(data)


def _fetch(store: Store, path: str) -> Result[Any, StatsLoadError]:
    store.dispatch(RequestedDataAtPath(path=path))
    result = read_stats(path)
    if result.is_err():
        logger.warning(str(result.error))
        store.dispatch(ErroredAtPath(path=path, error=result.error))
    else:
        logger.info(f"Loaded stats from {path}")
        store.dispatch(LoadedStatsAtPath(path=path, stats=result.value))
    return result


def load_into_store(store: Store, path: str) -> State:
    """
    Load ``path`` into ``store``, dispatching the request/settle actions.

    A path that is already ready is not read again.
    """
    if store.get_state().status_of(path) != DataPathStatus.READY:
        _fetch(store, path)
    return store.get_state()


def open_session(
    path: str,
    chunk_id: Optional[str] = None,
    exclude: Iterable[str] = (),
    store: Optional[Store] = None,
) -> Store:
    """
    Build a store with ``path`` loaded and selected.

    Args:
        path: Stats document to open.
        chunk_id: Chunk to select, None for the whole bundle.
        exclude: Module ids to blacklist.
        store: Existing store to reuse.

    Raises:
        StatsLoadError: If the document cannot be loaded.
        ChunkNotFoundError: If ``chunk_id`` is not a chunk of the document.
    """
    store = store or Store()
    store.dispatch(DiscoveredDataPaths(paths=[path]))
    store.dispatch(PickDataPath(path=path))
    if store.get_state().status_of(path) != DataPathStatus.READY:
        result = _fetch(store, path)
        if result.is_err():
            raise result.error

    state = store.get_state()
    if chunk_id is not None:
        if not has_chunk(state.selected_document, chunk_id):
            raise ChunkNotFoundError(chunk_id)
        store.dispatch(OnPickedChunk(chunk_id=chunk_id))
    for module_id in exclude:
        store.dispatch(OnRemoveModule(module_id=module_id))
    return store
