"""
Chunk Catalog.

Lists the chunks of a stats document and groups them under their
parent chunks, the way a chunk picker presents them.
"""

from typing import Any, Dict, List, Optional

from ..core.types import ChunkInfo
from .raw import chunk_members, normalize_id, read_chunks, read_modules


def list_chunks(document: Any) -> List[ChunkInfo]:
    """Chunk summaries in document order."""
    modules = read_modules(document)
    chunks = read_chunks(document)
    return [
        ChunkInfo(
            id=chunk.id,
            names=chunk.names,
            parents=chunk.parents,
            module_count=len(chunk_members(chunk.id, chunks, modules)),
            entry=chunk.entry,
        )
        for chunk in chunks
    ]


def chunks_by_parent(document: Any) -> Dict[Optional[str], List[ChunkInfo]]:
    """
    Group chunks by parent chunk id.

    A chunk with several parents is listed under each of them; chunks
    without parents are grouped under ``None``.
    """
    groups: Dict[Optional[str], List[ChunkInfo]] = {}
    for chunk in list_chunks(document):
        for parent in chunk.parents or (None,):
            groups.setdefault(parent, []).append(chunk)
    return groups


def has_chunk(document: Any, chunk_id: Any) -> bool:
    key = normalize_id(chunk_id)
    return any(chunk.id == key for chunk in read_chunks(document))
