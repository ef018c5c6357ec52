"""
In-memory entity store

Used by the test suite and for running the API without a database. Transactions
are serialized by a single lock; a failed transaction restores the snapshot taken
when it started.
"""

import asyncio
import copy
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional

from database.schema import COLUMN_DEFAULTS, FOREIGN_KEYS, TABLE_COLUMNS, check_columns
from database.store import EntityStore, StoreError, StoreSession

logger = logging.getLogger(__name__)


class InMemorySession(StoreSession):
    """Session over the store's dictionaries"""

    def __init__(self, store: "InMemoryEntityStore"):
        self.store = store

    @property
    def tables(self) -> Dict[str, Dict[int, Dict[str, Any]]]:
        return self.store.tables

    async def get(self, table: str, record_id: int, for_update: bool = False) -> Optional[Dict[str, Any]]:
        check_columns(table, [])
        await asyncio.sleep(0)
        row = self.tables[table].get(record_id)
        return dict(row) if row is not None else None

    async def list(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        check_columns(table, [order_by] if order_by else [])
        await asyncio.sleep(0)
        rows = [dict(row) for row in self.tables[table].values()]
        column = order_by or "id"

        def sort_key(row):
            value = row.get(column)
            return (value is None, value if value is not None else "")

        rows.sort(key=sort_key, reverse=descending)
        return rows

    async def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        check_columns(table, values)
        await asyncio.sleep(0)
        self._check_foreign_keys(table, values)

        row = {column: None for column in TABLE_COLUMNS[table]}
        row.update(COLUMN_DEFAULTS[table])
        if table == "testimonials":
            row["created_at"] = datetime.utcnow()
        row.update(values)

        if row.get("id") is None:
            row["id"] = self.store.next_id(table)
        elif row["id"] in self.tables[table]:
            raise StoreError(f"Duplicate key: {table}.id = {row['id']}")

        self.tables[table][row["id"]] = row
        return dict(row)

    async def update_fields(
        self,
        table: str,
        record_id: int,
        values: Optional[Dict[str, Any]] = None,
        increments: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        values = values or {}
        increments = increments or {}
        check_columns(table, list(values) + list(increments))
        await asyncio.sleep(0)

        row = self.tables[table].get(record_id)
        if row is None:
            return None
        self._check_foreign_keys(table, values)

        row.update(values)
        for column, delta in increments.items():
            row[column] = (row.get(column) or 0) + delta
        return dict(row)

    async def delete(self, table: str, record_id: int) -> bool:
        check_columns(table, [])
        await asyncio.sleep(0)

        if self.tables[table].pop(record_id, None) is None:
            return False

        # ON DELETE CASCADE
        for child, references in FOREIGN_KEYS.items():
            for column, parent in references.items():
                if parent != table:
                    continue
                orphans = [
                    child_id for child_id, child_row in self.tables[child].items()
                    if child_row.get(column) == record_id
                ]
                for child_id in orphans:
                    del self.tables[child][child_id]
        return True

    def _check_foreign_keys(self, table: str, values: Dict[str, Any]) -> None:
        for column, parent in FOREIGN_KEYS.get(table, {}).items():
            if column in values and values[column] not in self.tables[parent]:
                raise StoreError(
                    f"Foreign key violation: {table}.{column} = {values[column]} not present in {parent}"
                )


class InMemoryEntityStore(EntityStore):
    """Entity store holding every table in process memory"""

    def __init__(self):
        self.tables: Dict[str, Dict[int, Dict[str, Any]]] = {table: {} for table in TABLE_COLUMNS}
        self._sequences: Dict[str, int] = {table: 0 for table in TABLE_COLUMNS}
        self._lock = asyncio.Lock()

    def next_id(self, table: str) -> int:
        self._sequences[table] += 1
        return self._sequences[table]

    @asynccontextmanager
    async def session(self) -> AsyncIterator[StoreSession]:
        # Reads wait for any open transaction, so they only see committed rows
        async with self._lock:
            yield InMemorySession(self)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreSession]:
        async with self._lock:
            snapshot = copy.deepcopy(self.tables)
            try:
                yield InMemorySession(self)
            except BaseException:
                self.tables = snapshot
                logger.info("In-memory transaction rolled back")
                raise

    async def ping(self) -> bool:
        return True
