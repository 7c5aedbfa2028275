"""
Raw Stats Reader.

Tolerant accessors over a bundler statistics document. Two shapes are
understood and may be mixed freely:

    webpack:     {"modules": [{"id", "name", "size", "reasons": [{"moduleId"}],
                               "chunks": [...]}],
                  "chunks": [{"id", "names", "parents", "modules"}]}
    simplified:  {"modules": [{"id", "name", "size", "requires": [...],
                               "requiredBy": [...]}],
                  "chunks": [{"id", "modules": [...]}]}

Anything missing or malformed degrades to an empty value; nothing in
this module raises for bad input.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawModule:
    """A module entry with its fields normalized."""
    id: str
    name: str
    size: float
    requires: Tuple[str, ...]
    required_by: Tuple[str, ...]
    chunks: Tuple[str, ...]


@dataclass(frozen=True)
class RawChunk:
    """A chunk entry with its fields normalized."""
    id: str
    names: Tuple[str, ...]
    parents: Tuple[str, ...]
    modules: Tuple[str, ...]
    entry: bool


def normalize_id(value: Any) -> Optional[str]:
    """Identifiers may be ints or strings in stats files; compare as text."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def as_size(value: Any) -> float:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return 0
        return parsed if math.isfinite(parsed) else 0
    return 0


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _ids(values: Iterable[Any], key: str = "id") -> Tuple[str, ...]:
    """Collect ids from a list of plain ids or of objects carrying ``key``."""
    result: List[str] = []
    for value in values:
        if isinstance(value, Mapping):
            value = value.get(key)
        normalized = normalize_id(value)
        if normalized is not None and normalized not in result:
            result.append(normalized)
    return tuple(result)


def _read_module(entry: Any) -> Optional[RawModule]:
    if not isinstance(entry, Mapping):
        return None
    module_id = normalize_id(entry.get("id"))
    if module_id is None:
        return None

    requires = _ids(_as_list(entry.get("requires")))
    requires += tuple(
        dep for dep in _ids(_as_list(entry.get("dependencies")), key="moduleId")
        if dep not in requires
    )
    required_by = _ids(_as_list(entry.get("requiredBy")))
    required_by += tuple(
        reason for reason in _ids(_as_list(entry.get("reasons")), key="moduleId")
        if reason not in required_by
    )

    name = entry.get("name")
    return RawModule(
        id=module_id,
        name=str(name) if name is not None else module_id,
        size=as_size(entry.get("size")),
        requires=tuple(r for r in requires if r != module_id),
        required_by=tuple(r for r in required_by if r != module_id),
        chunks=_ids(_as_list(entry.get("chunks"))),
    )


def read_modules(document: Any) -> List[RawModule]:
    """
    Return the document's modules in document order, one per id.

    Top-level ``modules`` are preferred; documents that only nest module
    objects inside chunks are read from there. The first entry for an id
    wins.
    """
    if not isinstance(document, Mapping):
        return []

    entries = list(_as_list(document.get("modules")))
    if not entries:
        for chunk in _as_list(document.get("chunks")):
            if isinstance(chunk, Mapping):
                entries.extend(
                    m for m in _as_list(chunk.get("modules")) if isinstance(m, Mapping)
                )

    modules: Dict[str, RawModule] = {}
    for entry in entries:
        module = _read_module(entry)
        if module is None:
            logger.debug(f"Skipping malformed module entry: {entry!r:.80}")
            continue
        if module.id in modules:
            continue
        modules[module.id] = module
    return list(modules.values())


def read_chunks(document: Any) -> List[RawChunk]:
    """Return the document's chunks in document order, one per id."""
    if not isinstance(document, Mapping):
        return []

    chunks: Dict[str, RawChunk] = {}
    for entry in _as_list(document.get("chunks")):
        if not isinstance(entry, Mapping):
            continue
        chunk_id = normalize_id(entry.get("id"))
        if chunk_id is None or chunk_id in chunks:
            continue
        names = tuple(str(n) for n in _as_list(entry.get("names")) if n is not None)
        chunks[chunk_id] = RawChunk(
            id=chunk_id,
            names=names,
            parents=_ids(_as_list(entry.get("parents"))),
            modules=_ids(_as_list(entry.get("modules"))),
            entry=bool(entry.get("entry") or entry.get("initial")),
        )
    return list(chunks.values())


def chunk_members(
    chunk_id: str,
    chunks: List[RawChunk],
    modules: List[RawModule],
) -> List[str]:
    """
    Module ids belonging to a chunk, in document module order.

    Membership is the union of the chunk's own module list and every
    module whose ``chunks`` list names it. Ids listed by the chunk that
    are not module entries are ignored.
    """
    listed = set()
    for chunk in chunks:
        if chunk.id == chunk_id:
            listed.update(chunk.modules)
    return [m.id for m in modules if m.id in listed or chunk_id in m.chunks]


def requirement_graph(modules: List[RawModule]) -> Dict[str, List[str]]:
    """
    Map each module id to the ids it requires.

    Edges come from both ``requires`` on the requirer and
    ``requiredBy``/``reasons`` on the required module. Targets that are
    not module entries are dropped. Lists keep first-seen order.
    """
    known = {m.id for m in modules}
    graph: Dict[str, List[str]] = {m.id: [] for m in modules}

    def add(source: str, target: str) -> None:
        if source in known and target in known and source != target:
            if target not in graph[source]:
                graph[source].append(target)

    for module in modules:
        for target in module.requires:
            add(module.id, target)
    for module in modules:
        for source in module.required_by:
            add(source, module.id)
    return graph
