"""
In-process record store for local runs and tests. Contents live as long as
the instance does; separate processes each see their own copy.
"""

import logging
import uuid
from typing import Dict, List, Optional

from crud_backend.database.store import Record, RecordStore

logger = logging.getLogger(__name__)


class InMemoryStore(RecordStore):
    """Dict-backed store; list() follows insertion order"""

    def __init__(self, collection: str):
        super().__init__(collection)
        self._records: Dict[str, Record] = {}

    async def list(self) -> List[Record]:
        return [dict(record) for record in self._records.values()]

    async def get(self, record_id: str) -> Optional[Record]:
        record = self._records.get(record_id)
        return dict(record) if record is not None else None

    async def insert(self, data: Record) -> Record:
        record_id = str(uuid.uuid4())
        record = {"id": record_id, **{key: value for key, value in data.items() if key != "id"}}
        self._records[record_id] = record
        logger.debug(f"Inserted {self.collection}/{record_id}")
        return dict(record)

    async def update(self, record_id: str, partial: Record) -> Optional[Record]:
        existing = self._records.get(record_id)
        if existing is None:
            return None
        # id stays fixed even if a caller passes one in
        merged = {**existing, **partial, "id": record_id}
        self._records[record_id] = merged
        return dict(merged)

    async def remove(self, record_id: str) -> bool:
        if record_id not in self._records:
            return False
        del self._records[record_id]
        logger.debug(f"Removed {self.collection}/{record_id}")
        return True

    async def close(self) -> None:
        self._records.clear()
