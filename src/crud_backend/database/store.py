"""
Record store interface shared by every persistence backend
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class RecordStore(ABC):
    """
    Keyed collection of records. Every record carries a string ``id``
    assigned by the store on insert; the id is never changed afterwards.
    Absence is reported through return values, not exceptions.
    """

    def __init__(self, collection: str):
        self.collection = collection

    @abstractmethod
    async def list(self) -> List[Record]:
        """All records currently in the collection"""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[Record]:
        """The record with this id, or None"""

    @abstractmethod
    async def insert(self, data: Record) -> Record:
        """Persist data under a new id and return the full record"""

    @abstractmethod
    async def update(self, record_id: str, partial: Record) -> Optional[Record]:
        """Shallow-merge partial into the record; None if it does not exist"""

    @abstractmethod
    async def remove(self, record_id: str) -> bool:
        """Delete the record; False if it did not exist"""

    async def ping(self) -> None:
        """Raise if the backing store is unreachable"""

    async def close(self) -> None:
        """Release anything the store holds"""
