"""
One-time construction and teardown of the stores the app serves
"""

import logging
from dataclasses import dataclass
from typing import Optional

import asyncpg

from crud_backend.config.settings import Settings
from crud_backend.database.connection import init_database, close_database
from crud_backend.database.document_store import DocumentStore
from crud_backend.database.memory_store import InMemoryStore
from crud_backend.database.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """Per-collection stores plus the pool behind them, if any"""
    users: RecordStore
    posts: RecordStore
    backend: str = "memory"
    db_pool: Optional[asyncpg.Pool] = None


def memory_stores() -> Stores:
    return Stores(users=InMemoryStore("users"), posts=InMemoryStore("posts"))


async def open_stores(settings: Settings) -> Stores:
    """Build the users and posts stores for the configured backend"""
    if settings.store_backend == "memory":
        logger.info("Using in-memory stores; data is lost on restart")
        return memory_stores()

    db_pool = await init_database(settings)
    users = DocumentStore(db_pool, "users")
    posts = DocumentStore(db_pool, "posts")
    try:
        await users.ensure_collection()
        await posts.ensure_collection()
    except Exception:
        await close_database(db_pool)
        raise
    return Stores(users=users, posts=posts, backend="postgres", db_pool=db_pool)


async def close_stores(stores: Stores) -> None:
    await stores.users.close()
    await stores.posts.close()
    if stores.db_pool is not None:
        await close_database(stores.db_pool)
