"""
depsize - Bundle Dependency Size Explorer.

depsize loads bundler statistics documents (webpack stats.json and
compatible shapes) and answers, per output chunk, which modules are
responsible for how much of the bundle.

Key Components:
- stats: Raw document access, tree derivation, filtering and sorting
- state: Action catalog, pure reducer and store
- loader: Discovery and loading of stats files
- cli: Terminal front-end

Usage:
    from depsize.state import Store, PickDataPath
    from depsize.loader import load_into_store

    store = Store()
    store.dispatch(PickDataPath(path="stats.json"))
    load_into_store(store, "stats.json")
    data = store.get_state().calculated_full_module_data
"""

__version__ = "0.1.0"

from .core.types import (
    DataPathStatus,
    ExpandMode,
    FilterProps,
    FullModuleData,
    ModuleRecord,
    SortDirection,
    SortableField,
    SortProps,
)

__all__ = [
    "__version__",
    "DataPathStatus",
    "ExpandMode",
    "FilterProps",
    "FullModuleData",
    "ModuleRecord",
    "SortDirection",
    "SortableField",
    "SortProps",
]
