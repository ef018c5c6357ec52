"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

from config import settings
from database.postgres_store import PostgresEntityStore
from database.schema import CREATE_TABLES_SQL

logger = logging.getLogger(__name__)


async def create_pool(dsn: str) -> asyncpg.Pool:
    """Create an asyncpg pool with the configured limits"""
    return await asyncpg.create_pool(
        dsn,
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        command_timeout=settings.DB_COMMAND_TIMEOUT,
        statement_cache_size=0  # Fix for pgbouncer compatibility
    )


async def init_database(
    write_url: Optional[str] = None,
    read_url: Optional[str] = None,
) -> PostgresEntityStore:
    """Open the write and read pools, create missing tables and return the store"""
    write_url = write_url or settings.DATABASE_URL_WRITE
    read_url = read_url or settings.DATABASE_URL_READ or write_url
    if not write_url:
        raise ValueError("DATABASE_URL_WRITE environment variable is required")

    write_pool = await create_pool(write_url)
    read_pool = write_pool if read_url == write_url else await create_pool(read_url)

    # Test connection and create tables on the primary
    async with write_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")
        await conn.execute(CREATE_TABLES_SQL)

    logger.info("Database initialized successfully")
    return PostgresEntityStore(write_pool, read_pool)
