"""
DocumentStore SQL behaviour, checked against a mocked asyncpg pool
"""

import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from crud_backend.database.document_store import DocumentStore


class FakePool:
    """Stands in for asyncpg.Pool; every acquire() yields the same connection"""

    def __init__(self):
        self.conn = AsyncMock()

    @asynccontextmanager
    async def acquire(self):
        yield self.conn


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def store(pool):
    return DocumentStore(pool, "users")


class TestDocumentStore:

    @pytest.mark.parametrize("name", ["users; DROP TABLE x", "Users", "1users", ""])
    def test_rejects_unsafe_collection_names(self, pool, name):
        with pytest.raises(ValueError):
            DocumentStore(pool, name)

    @pytest.mark.asyncio
    async def test_ensure_collection_creates_table(self, store, pool):
        await store.ensure_collection()

        query = pool.conn.execute.await_args.args[0]
        assert query.startswith("CREATE TABLE IF NOT EXISTS users")
        assert "gen_random_uuid()" in query

    @pytest.mark.asyncio
    async def test_insert_sends_document_and_returns_record(self, store, pool):
        pool.conn.fetchrow.return_value = {
            "id": "generated-id",
            "data": '{"email": "a@example.com", "name": "A"}',
        }

        record = await store.insert({"email": "a@example.com", "name": "A"})

        assert record == {"id": "generated-id", "email": "a@example.com", "name": "A"}
        query, document = pool.conn.fetchrow.await_args.args
        assert query.startswith("INSERT INTO users (data)")
        assert json.loads(document) == {"email": "a@example.com", "name": "A"}

    @pytest.mark.asyncio
    async def test_insert_strips_id_from_document(self, store, pool):
        pool.conn.fetchrow.return_value = {"id": "generated-id", "data": {"name": "A"}}

        await store.insert({"id": "client-id", "name": "A"})

        document = pool.conn.fetchrow.await_args.args[1]
        assert "id" not in json.loads(document)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, store, pool):
        pool.conn.fetchrow.return_value = None

        assert await store.get("missing") is None
        assert pool.conn.fetchrow.await_args.args[1] == "missing"

    @pytest.mark.asyncio
    async def test_list_decodes_rows(self, store, pool):
        pool.conn.fetch.return_value = [
            {"id": "1", "data": '{"name": "A"}'},
            {"id": "2", "data": {"name": "B"}},
        ]

        assert await store.list() == [{"id": "1", "name": "A"}, {"id": "2", "name": "B"}]

    @pytest.mark.asyncio
    async def test_update_is_single_merge_statement(self, store, pool):
        pool.conn.fetchrow.return_value = {"id": "1", "data": '{"email": "a@example.com", "name": "B"}'}

        record = await store.update("1", {"name": "B"})

        assert record == {"id": "1", "email": "a@example.com", "name": "B"}
        query, record_id, patch = pool.conn.fetchrow.await_args.args
        assert "data = data || $2::jsonb" in query
        assert record_id == "1"
        assert json.loads(patch) == {"name": "B"}

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store, pool):
        pool.conn.fetchrow.return_value = None

        assert await store.update("ghost", {"name": "B"}) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,expected", [("DELETE 1", True), ("DELETE 0", False)])
    async def test_remove_reads_affected_rows(self, store, pool, status, expected):
        pool.conn.execute.return_value = status

        assert await store.remove("1") is expected

    @pytest.mark.asyncio
    async def test_database_errors_propagate(self, store, pool):
        pool.conn.fetch.side_effect = ConnectionError("connection reset")

        with pytest.raises(ConnectionError):
            await store.list()
