"""
Database connection and pool management
"""

import asyncpg
import logging

from crud_backend.config.settings import Settings

logger = logging.getLogger(__name__)


async def init_database(settings: Settings) -> asyncpg.Pool:
    """Create the connection pool and check it can reach the database"""
    db_pool = await asyncpg.create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
        statement_cache_size=0  # Fix for pgbouncer compatibility
    )

    # Test connection
    async with db_pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    logger.info("Database initialized successfully")
    return db_pool


async def close_database(db_pool: asyncpg.Pool) -> None:
    """Close database connection pool"""
    await db_pool.close()
    logger.info("Database connections closed")
