"""Record and blob store interfaces.

Stores are explicit handles: construct one, ``open()`` it (or use it as an
async context manager), pass it to whatever needs it, and ``close()`` it.
Nothing in roadmap-grid holds a global connection.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping

from roadmap_grid.errors import StoreError
from roadmap_grid.model.records import RECORD_TYPES

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """True if ``row`` satisfies every filter.

    A list, tuple, set or frozenset filter value means "is one of"; any
    other value means equality.
    """
    for name, wanted in filters.items():
        value = row.get(name)
        if isinstance(wanted, (list, tuple, set, frozenset)):
            if value not in wanted:
                return False
        elif value != wanted:
            return False
    return True


class RecordStore(ABC):
    """Async CRUD over named tables of plain dict rows, keyed by ``id``."""

    def __init__(self) -> None:
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        if self._open:
            return
        await self._connect()
        self._open = True

    async def close(self) -> None:
        if not self._open:
            return
        await self._disconnect()
        self._open = False

    async def __aenter__(self) -> RecordStore:
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _check(self, table: str) -> None:
        if not self._open:
            raise StoreError(f"{type(self).__name__} is not open")
        if table not in RECORD_TYPES:
            raise StoreError(f"unknown table {table!r}")

    async def select(self, table: str, **filters: Any) -> list[Row]:
        """Return copies of the rows of ``table`` matching ``filters``."""
        self._check(table)
        return await self._select(table, filters)

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        self._check(table)
        if not record.get("id"):
            raise StoreError(f"{table}: record has no id")
        logger.debug("insert %s %s", table, record["id"])
        return await self._insert(table, dict(record))

    async def update(self, table: str, record_id: str, fields: Mapping[str, Any]) -> Row:
        self._check(table)
        logger.debug("update %s %s %s", table, record_id, sorted(fields))
        return await self._update(table, record_id, dict(fields))

    async def delete(self, table: str, record_id: str) -> None:
        self._check(table)
        logger.debug("delete %s %s", table, record_id)
        await self._delete(table, record_id)

    async def _connect(self) -> None:
        """Acquire backend resources."""

    async def _disconnect(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def _select(self, table: str, filters: Mapping[str, Any]) -> list[Row]: ...

    @abstractmethod
    async def _insert(self, table: str, record: Row) -> Row: ...

    @abstractmethod
    async def _update(self, table: str, record_id: str, fields: Row) -> Row: ...

    @abstractmethod
    async def _delete(self, table: str, record_id: str) -> None: ...


class BlobStore(ABC):
    """Stores attachment bytes and hands out URLs for them."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` and return its public URL."""

    @abstractmethod
    async def get_url(self, key: str) -> str:
        """Return the public URL of a stored key."""
