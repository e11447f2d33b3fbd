"""Record store boundary: interfaces, in-memory and JSON-file stores, loader."""

from roadmap_grid.store.base import BlobStore, RecordStore
from roadmap_grid.store.json_file import JsonFileRecordStore
from roadmap_grid.store.loader import first_roadmap_id, load_board
from roadmap_grid.store.memory import MemoryBlobStore, MemoryRecordStore

__all__ = [
    "BlobStore",
    "JsonFileRecordStore",
    "MemoryBlobStore",
    "MemoryRecordStore",
    "RecordStore",
    "first_roadmap_id",
    "load_board",
]
