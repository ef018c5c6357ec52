"""
PostgreSQL entity store backed by asyncpg write/read pools
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import asyncpg

from database.schema import check_columns
from database.store import EntityStore, StoreError, StoreSession

logger = logging.getLogger(__name__)


class PostgresSession(StoreSession):
    """Session bound to a single asyncpg connection"""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def get(self, table: str, record_id: int, for_update: bool = False) -> Optional[Dict[str, Any]]:
        check_columns(table, [])
        query = f"SELECT * FROM {table} WHERE id = $1"
        if for_update:
            query += " FOR UPDATE"
        try:
            row = await self.conn.fetchrow(query, record_id)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during SELECT on {table}: {e}")
            raise StoreError(f"Database SELECT failed: {str(e)}") from e
        return dict(row) if row else None

    async def list(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        check_columns(table, [order_by] if order_by else [])
        direction = "DESC" if descending else "ASC"
        query = f"SELECT * FROM {table} ORDER BY {order_by or 'id'} {direction}"
        try:
            rows = await self.conn.fetch(query)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during SELECT on {table}: {e}")
            raise StoreError(f"Database SELECT failed: {str(e)}") from e
        return [dict(row) for row in rows]

    async def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        check_columns(table, values)
        columns = list(values)
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        query = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) RETURNING *"

        logger.info(f"Executing INSERT: {query}")
        try:
            row = await self.conn.fetchrow(query, *[values[column] for column in columns])
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during INSERT on {table}: {e}")
            raise StoreError(f"Database INSERT failed: {str(e)}") from e

        if not row:
            raise StoreError("Insert operation failed - no data returned")
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
        if not values and not increments:
            return await self.get(table, record_id)

        assignments = []
        params: List[Any] = []
        for column, value in values.items():
            params.append(value)
            assignments.append(f"{column} = ${len(params)}")
        for column, delta in increments.items():
            params.append(delta)
            assignments.append(f"{column} = COALESCE({column}, 0) + ${len(params)}")
        params.append(record_id)
        query = f"UPDATE {table} SET {', '.join(assignments)} WHERE id = ${len(params)} RETURNING *"

        logger.info(f"Executing UPDATE: {query}")
        try:
            row = await self.conn.fetchrow(query, *params)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during UPDATE on {table}: {e}")
            raise StoreError(f"Database UPDATE failed: {str(e)}") from e
        return dict(row) if row else None

    async def delete(self, table: str, record_id: int) -> bool:
        check_columns(table, [])
        query = f"DELETE FROM {table} WHERE id = $1"

        logger.info(f"Executing DELETE: {query}")
        try:
            result = await self.conn.execute(query, record_id)
        except asyncpg.PostgresError as e:
            logger.error(f"Database error during DELETE on {table}: {e}")
            raise StoreError(f"Database DELETE failed: {str(e)}") from e

        # asyncpg returns "DELETE N" where N is the number of rows
        deleted_count = int(result.split()[-1]) if result else 0
        return deleted_count > 0


class PostgresEntityStore(EntityStore):
    """Entity store over a primary (write) pool and a replica (read) pool"""

    def __init__(self, write_pool: asyncpg.Pool, read_pool: Optional[asyncpg.Pool] = None):
        self.write_pool = write_pool
        self.read_pool = read_pool or write_pool

    @asynccontextmanager
    async def session(self) -> AsyncIterator[StoreSession]:
        async with self.read_pool.acquire() as conn:
            yield PostgresSession(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreSession]:
        async with self.write_pool.acquire() as conn:
            try:
                async with conn.transaction():
                    yield PostgresSession(conn)
            except asyncpg.PostgresError as e:
                # Raised by COMMIT itself, e.g. a deferred constraint
                logger.error(f"Transaction failed: {e}")
                raise StoreError(f"Database transaction failed: {str(e)}") from e

    async def ping(self) -> bool:
        try:
            async with self.read_pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (asyncpg.PostgresError, OSError) as e:
            raise StoreError(f"Database unreachable: {str(e)}") from e
        return True

    async def close(self) -> None:
        await self.write_pool.close()
        if self.read_pool is not self.write_pool:
            await self.read_pool.close()
        logger.info("Database connections closed")
