"""Record store backed by a single JSON document.

The file holds one object mapping table name -> list of rows. It is read
on ``open()`` and rewritten after every write; file I/O runs in a worker
thread via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from roadmap_grid.errors import StoreError
from roadmap_grid.model.records import RECORD_TYPES
from roadmap_grid.store.memory import MemoryRecordStore

logger = logging.getLogger(__name__)


def _read(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def _write(path: Path, tables: dict) -> None:
    tmp = path.with_name(path.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as fh:
        json.dump(tables, fh, indent=2)
        fh.write("\n")
    os.replace(tmp, path)


class JsonFileRecordStore(MemoryRecordStore):
    """MemoryRecordStore persisted to ``path`` after every write."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    async def _connect(self) -> None:
        try:
            data = await asyncio.to_thread(_read, self.path)
        except (OSError, ValueError) as exc:
            raise StoreError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"{self.path}: expected a JSON object of tables")
        unknown = sorted(set(data) - set(RECORD_TYPES))
        if unknown:
            logger.warning("%s: ignoring unknown table(s) %s", self.path, ", ".join(unknown))
        self.tables = {name: list(data.get(name) or []) for name in RECORD_TYPES}
        logger.debug("loaded %s", self.path)

    async def _changed(self) -> None:
        try:
            await asyncio.to_thread(_write, self.path, self.tables)
        except OSError as exc:
            raise StoreError(f"cannot write {self.path}: {exc}") from exc
