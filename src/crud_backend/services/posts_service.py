"""
Posts service - posts are read-only through the API
"""

from crud_backend.database.store import RecordStore
from crud_backend.services.base_service import BaseService, ServiceResult


class PostsService(BaseService):
    """Service for post records"""

    def __init__(self, store: RecordStore):
        super().__init__("posts", store)

    async def list_posts(self) -> ServiceResult:
        return await self.read()
