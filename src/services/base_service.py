"""
Base service layer for unified entity-store operations
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

from database.store import EntityStore, StoreError

logger = logging.getLogger(__name__)

# error_type values carried by ServiceResult
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
STORE_FAILURE = "STORE_FAILURE"


class ServiceError(Exception):
    """Business failure raised inside an operation and reported through ServiceResult"""
    error_type = STORE_FAILURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or malformed input, including a bad date range"""
    error_type = VALIDATION_ERROR


class NotFoundError(ServiceError):
    """Referenced car, customer or reservation does not exist"""
    error_type = NOT_FOUND


class ConflictError(ServiceError):
    """Car is not available"""
    error_type = CONFLICT


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, rows: List[Dict[str, Any]]) -> "ServiceResult":
        return cls(success=True, data=rows, count=len(rows))

    @classmethod
    def fail(cls, error: str, error_type: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

    @classmethod
    def from_exception(cls, exc: Exception) -> "ServiceResult":
        if isinstance(exc, ServiceError):
            return cls.fail(exc.message, exc.error_type)
        return cls.fail(str(exc), STORE_FAILURE)


class BaseService:
    """Base service with the single-table CRUD operations shared by every resource"""

    def __init__(self, store: EntityStore, table: str, label: str):
        self.store = store
        self.table = table
        self.label = label

    async def list(self, order_by: Optional[str] = None, descending: bool = False) -> ServiceResult:
        """List every row of the table"""
        try:
            rows = await self.store.list(self.table, order_by=order_by, descending=descending)
            return ServiceResult.ok(rows)
        except StoreError as e:
            logger.error(f"Failed to list {self.table}: {e}")
            return ServiceResult.from_exception(e)

    async def get_by_id(self, record_id: int) -> ServiceResult:
        """
        Get a row by its id

        Returns:
            ServiceResult with the row, or error_type NOT_FOUND
        """
        try:
            row = await self.store.get(self.table, record_id)
        except StoreError as e:
            logger.error(f"Failed to get {self.label} {record_id}: {e}")
            return ServiceResult.from_exception(e)
        if row is None:
            return ServiceResult.fail(f"{self.label} not found", NOT_FOUND)
        return ServiceResult.ok([row])

    async def create(self, data: Dict[str, Any]) -> ServiceResult:
        """Insert a row and return it"""
        try:
            row = await self.store.insert(self.table, data)
        except StoreError as e:
            logger.error(f"Failed to create {self.label}: {e}")
            return ServiceResult.from_exception(e)
        logger.info(f"Created {self.label} {row['id']}")
        return ServiceResult.ok([row])

    async def update(self, record_id: int, data: Dict[str, Any]) -> ServiceResult:
        """Assign the given fields on an existing row"""
        try:
            row = await self.store.update_fields(self.table, record_id, data)
        except StoreError as e:
            logger.error(f"Failed to update {self.label} {record_id}: {e}")
            return ServiceResult.from_exception(e)
        if row is None:
            return ServiceResult.fail(f"{self.label} not found", NOT_FOUND)
        logger.info(f"Updated {self.label} {record_id}")
        return ServiceResult.ok([row])

    async def delete(self, record_id: int) -> ServiceResult:
        """Delete a row; dependent reservations go with it"""
        try:
            deleted = await self.store.delete(self.table, record_id)
        except StoreError as e:
            logger.error(f"Failed to delete {self.label} {record_id}: {e}")
            return ServiceResult.from_exception(e)
        if not deleted:
            return ServiceResult.fail(f"{self.label} not found", NOT_FOUND)
        logger.info(f"Deleted {self.label} {record_id}")
        return ServiceResult(success=True, data=[{"id": record_id}], count=1)
