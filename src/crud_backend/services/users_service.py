"""
Users service - validated CRUD over the users collection
"""

import logging
from typing import Any

from crud_backend.database.store import RecordStore
from crud_backend.models.user import UserCreate, UserUpdate
from crud_backend.services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class UsersService(BaseService):
    """Service for user records"""

    create_model = UserCreate
    update_model = UserUpdate

    def __init__(self, store: RecordStore):
        super().__init__("users", store)

    async def list_users(self) -> ServiceResult:
        return await self.read()

    async def get_user(self, user_id: str) -> ServiceResult:
        return await self.get_by_id(user_id)

    async def create_user(self, payload: Any) -> ServiceResult:
        """
        Create a user from a raw request body

        Args:
            payload: Must carry a valid email and a non-empty name

        Returns:
            ServiceResult with the created user including its new id
        """
        return await self.create(payload)

    async def update_user(self, user_id: str, payload: Any) -> ServiceResult:
        """Merge the supplied email and/or name into an existing user"""
        return await self.update(user_id, payload)

    async def delete_user(self, user_id: str) -> ServiceResult:
        return await self.delete(user_id)
