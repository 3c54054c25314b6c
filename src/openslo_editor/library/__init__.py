"""Saved-document library and the persistence collaborators behind it."""

from openslo_editor.library.store import (
    InMemoryLibraryStore,
    JsonFileLibraryStore,
    LibraryStore,
    delete_from_library,
    from_saved,
    load_from_library,
    save_to_library,
)

__all__ = [
    "InMemoryLibraryStore",
    "JsonFileLibraryStore",
    "LibraryStore",
    "delete_from_library",
    "from_saved",
    "load_from_library",
    "save_to_library",
]
