"""
Base service layer for record operations over a RecordStore
"""

import logging
from typing import Dict, Any, List, Optional, Type
from dataclasses import dataclass, field

from pydantic import BaseModel

from crud_backend.database.store import RecordStore
from crud_backend.services.validation import FieldError, validate_payload

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: List[Dict[str, Any]] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: List[FieldError] = field(default_factory=list)

    @classmethod
    def ok(cls, records: List[Dict[str, Any]]) -> "ServiceResult":
        return cls(success=True, data=records, count=len(records))

    @classmethod
    def not_found(cls, resource_name: str, record_id: str) -> "ServiceResult":
        return cls(
            success=False,
            error=f"Record not found with ID: {record_id} in {resource_name}",
            error_type=RESOURCE_NOT_FOUND,
        )

    @classmethod
    def invalid(cls, errors: List[FieldError]) -> "ServiceResult":
        return cls(
            success=False,
            error="Validation failed",
            error_type=VALIDATION_ERROR,
            details=errors,
        )


class BaseService:
    """
    Base service composing payload validation with a record store.

    Store failures are not caught here: they are faults, not results,
    and surface through the application's error handlers.
    """

    create_model: Optional[Type[BaseModel]] = None
    update_model: Optional[Type[BaseModel]] = None

    def __init__(self, resource_name: str, store: RecordStore):
        self.resource_name = resource_name
        self.store = store
        logger.info(f"{type(self).__name__} initialized for resource: {resource_name}")

    async def read(self) -> ServiceResult:
        """All records in the collection"""
        records = await self.store.list()
        return ServiceResult.ok(records)

    async def get_by_id(self, record_id: str) -> ServiceResult:
        """
        Get a single record by id

        Returns:
            ServiceResult with one record, or RESOURCE_NOT_FOUND
        """
        record = await self.store.get(record_id)
        if record is None:
            return ServiceResult.not_found(self.resource_name, record_id)
        return ServiceResult.ok([record])

    async def create(self, payload: Any) -> ServiceResult:
        """
        Validate payload against create_model and insert it

        Args:
            payload: Decoded request body

        Returns:
            ServiceResult with the created record, or VALIDATION_ERROR
        """
        validation = validate_payload(self.create_model, payload)
        if not validation.success:
            return ServiceResult.invalid(validation.errors)

        record = await self.store.insert(validation.value)
        logger.info(f"Created {self.resource_name} record {record['id']}")
        return ServiceResult.ok([record])

    async def update(self, record_id: str, payload: Any) -> ServiceResult:
        """
        Validate a partial payload and merge it into an existing record

        Validation runs first, so an invalid body is reported even when
        the id does not exist. An empty payload leaves the record unchanged.
        """
        validation = validate_payload(self.update_model, payload)
        if not validation.success:
            return ServiceResult.invalid(validation.errors)

        record = await self.store.update(record_id, validation.value)
        if record is None:
            return ServiceResult.not_found(self.resource_name, record_id)
        logger.info(f"Updated {self.resource_name} record {record_id}: {sorted(validation.value)}")
        return ServiceResult.ok([record])

    async def delete(self, record_id: str) -> ServiceResult:
        """Delete a record by id; RESOURCE_NOT_FOUND if it is already gone"""
        removed = await self.store.remove(record_id)
        if not removed:
            return ServiceResult.not_found(self.resource_name, record_id)
        logger.info(f"Deleted {self.resource_name} record {record_id}")
        return ServiceResult(success=True, count=1)
