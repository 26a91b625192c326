"""
PostgreSQL-backed document store. Each collection is a table of JSONB
documents keyed by a server-generated id. Every call is a single statement;
nothing spans calls, so concurrent writers to the same id race and the last
merge wins per field.
"""

import json
import logging
import re
from typing import List, Optional

import asyncpg

from crud_backend.database.store import Record, RecordStore

logger = logging.getLogger(__name__)

_COLLECTION_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


class DocumentStore(RecordStore):
    """Record store over one JSONB table, accessed through an asyncpg pool"""

    def __init__(self, db_pool: asyncpg.Pool, collection: str):
        # The name is interpolated into SQL, so only plain identifiers pass
        if not _COLLECTION_NAME.match(collection):
            raise ValueError(f"Invalid collection name: {collection!r}")
        super().__init__(collection)
        self.db_pool = db_pool

    @staticmethod
    def _to_record(row) -> Record:
        data = row["data"]
        if isinstance(data, str):
            data = json.loads(data)
        return {"id": row["id"], **{key: value for key, value in data.items() if key != "id"}}

    async def ensure_collection(self) -> None:
        """Create the backing table if it does not exist yet"""
        query = (
            f"CREATE TABLE IF NOT EXISTS {self.collection} ("
            "id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text, "
            "data JSONB NOT NULL)"
        )
        async with self.db_pool.acquire() as conn:
            await conn.execute(query)
        logger.info(f"Collection ready: {self.collection}")

    async def list(self) -> List[Record]:
        async with self.db_pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT id, data FROM {self.collection}")
        return [self._to_record(row) for row in rows]

    async def get(self, record_id: str) -> Optional[Record]:
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT id, data FROM {self.collection} WHERE id = $1", record_id
            )
        return self._to_record(row) if row else None

    async def insert(self, data: Record) -> Record:
        document = {key: value for key, value in data.items() if key != "id"}
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(
                f"INSERT INTO {self.collection} (data) VALUES ($1::jsonb) RETURNING id, data",
                json.dumps(document),
            )
        if not row:
            raise RuntimeError(f"Insert into {self.collection} returned no row")
        logger.info(f"Inserted {self.collection}/{row['id']}")
        return self._to_record(row)

    async def update(self, record_id: str, partial: Record) -> Optional[Record]:
        patch = {key: value for key, value in partial.items() if key != "id"}
        async with self.db_pool.acquire() as conn:
            row = await conn.fetchrow(
                f"UPDATE {self.collection} SET data = data || $2::jsonb "
                "WHERE id = $1 RETURNING id, data",
                record_id,
                json.dumps(patch),
            )
        return self._to_record(row) if row else None

    async def remove(self, record_id: str) -> bool:
        async with self.db_pool.acquire() as conn:
            result = await conn.execute(
                f"DELETE FROM {self.collection} WHERE id = $1", record_id
            )
        # asyncpg returns "DELETE N" where N is the number of rows
        deleted_count = int(result.split()[-1]) if result else 0
        if deleted_count:
            logger.info(f"Removed {self.collection}/{record_id}")
        return deleted_count > 0

    async def ping(self) -> None:
        async with self.db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
