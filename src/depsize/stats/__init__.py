"""
Stats analysis: raw document access, tree derivation, filtering, sorting.
"""

from .chunks import chunks_by_parent, has_chunk, list_chunks
from .filtering import compile_filter, filter_modules, matches
from .full_module_data import derive
from .index import build_index, find_collapsible_ancestor
from .sorting import compare, sort_modules

__all__ = [
    "build_index",
    "chunks_by_parent",
    "compare",
    "compile_filter",
    "derive",
    "filter_modules",
    "find_collapsible_ancestor",
    "has_chunk",
    "list_chunks",
    "matches",
    "sort_modules",
]
