"""In-memory record and blob stores."""

from __future__ import annotations

import copy
import time
from typing import Any, Mapping

from roadmap_grid.errors import StoreError
from roadmap_grid.model.records import RECORD_TYPES
from roadmap_grid.store.base import BlobStore, RecordStore, Row, matches


class MemoryRecordStore(RecordStore):
    """Tables held in a dict of row lists.

    Inserting a duplicate id or updating a missing row raises StoreError;
    deleting a missing row is a no-op.
    """

    def __init__(self, tables: Mapping[str, list[Row]] | None = None) -> None:
        super().__init__()
        self.tables: dict[str, list[Row]] = {name: [] for name in RECORD_TYPES}
        for name, rows in (tables or {}).items():
            self.tables[name] = copy.deepcopy(list(rows))

    def _find(self, table: str, record_id: str) -> Row | None:
        for row in self.tables[table]:
            if row.get("id") == record_id:
                return row
        return None

    async def _select(self, table: str, filters: Mapping[str, Any]) -> list[Row]:
        return [copy.deepcopy(r) for r in self.tables[table] if matches(r, filters)]

    async def _insert(self, table: str, record: Row) -> Row:
        if self._find(table, record["id"]) is not None:
            raise StoreError(f"{table}: duplicate key {record['id']!r}")
        rows = self.tables[table]
        self.tables[table] = [*rows, copy.deepcopy(record)]
        await self._commit(table, rows)
        return copy.deepcopy(record)

    async def _update(self, table: str, record_id: str, fields: Row) -> Row:
        rows = self.tables[table]
        row = self._find(table, record_id)
        if row is None:
            raise StoreError(f"{table}: no record {record_id!r}")
        updated = {**row, **copy.deepcopy(fields)}
        self.tables[table] = [updated if r is row else r for r in rows]
        await self._commit(table, rows)
        return copy.deepcopy(updated)

    async def _delete(self, table: str, record_id: str) -> None:
        rows = self.tables[table]
        kept = [r for r in rows if r.get("id") != record_id]
        if len(kept) != len(rows):
            self.tables[table] = kept
            await self._commit(table, rows)

    async def _commit(self, table: str, previous: list[Row]) -> None:
        """Keep a write only if ``_changed`` succeeds; else restore ``previous``."""
        try:
            await self._changed()
        except StoreError:
            self.tables[table] = previous
            raise

    async def _changed(self) -> None:
        """Hook called after every write; a StoreError undoes the write."""


class MemoryBlobStore(BlobStore):
    """Blob store keeping uploads in memory.

    Keys are prefixed with a millisecond timestamp so repeated uploads of
    the same file name do not collide.
    """

    def __init__(self, base_url: str = "memory://attachments") -> None:
        self.base_url = base_url.rstrip("/")
        self.blobs: dict[str, tuple[bytes, str]] = {}

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        if not key:
            raise StoreError("blob key is required")
        stamp = int(time.time() * 1000)
        while f"{stamp}-{key}" in self.blobs:
            stamp += 1
        unique = f"{stamp}-{key}"
        self.blobs[unique] = (bytes(data), content_type or "application/octet-stream")
        return await self.get_url(unique)

    async def get_url(self, key: str) -> str:
        if key not in self.blobs:
            raise StoreError(f"no blob {key!r}")
        return f"{self.base_url}/{key}"
