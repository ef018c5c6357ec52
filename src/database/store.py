"""
Entity store interface shared by the Postgres and in-memory backends
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, Awaitable, Callable, Dict, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreError(RuntimeError):
    """Raised when the underlying store rejects or fails a statement"""


class StoreSession(ABC):
    """Row-level operations bound to one connection (and possibly one transaction)"""

    @abstractmethod
    async def get(self, table: str, record_id: int, for_update: bool = False) -> Optional[Dict[str, Any]]:
        """Fetch a row by id; for_update locks it until the transaction ends"""

    @abstractmethod
    async def list(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        """Fetch all rows of a table"""

    @abstractmethod
    async def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it with its assigned id"""

    @abstractmethod
    async def update_fields(
        self,
        table: str,
        record_id: int,
        values: Optional[Dict[str, Any]] = None,
        increments: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Assign `values` and add `increments` to the current column values

        Returns the updated row, or None if no row has that id.
        """

    @abstractmethod
    async def delete(self, table: str, record_id: int) -> bool:
        """Delete a row (cascading to dependent rows); False if it did not exist"""


class EntityStore(ABC):
    """Persistence capability for cars, customers, reservations, settings and testimonials"""

    @abstractmethod
    def session(self) -> AsyncContextManager[StoreSession]:
        """Session for single statements outside an explicit transaction"""

    @abstractmethod
    def transaction(self) -> AsyncContextManager[StoreSession]:
        """Session whose statements commit together, or roll back on any exception"""

    @abstractmethod
    async def ping(self) -> bool:
        """Check connectivity"""

    async def close(self) -> None:
        """Release resources held by the store"""

    async def run_in_transaction(self, fn: Callable[[StoreSession], Awaitable[T]]) -> T:
        """Run `fn(session)` atomically and return its result"""
        async with self.transaction() as session:
            return await fn(session)

    # Single-statement helpers

    async def get(self, table: str, record_id: int) -> Optional[Dict[str, Any]]:
        async with self.session() as session:
            return await session.get(table, record_id)

    async def list(self, table: str, order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        async with self.session() as session:
            return await session.list(table, order_by=order_by, descending=descending)

    async def insert(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        async with self.transaction() as session:
            return await session.insert(table, values)

    async def update_fields(
        self,
        table: str,
        record_id: int,
        values: Optional[Dict[str, Any]] = None,
        increments: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        async with self.transaction() as session:
            return await session.update_fields(table, record_id, values, increments)

    async def delete(self, table: str, record_id: int) -> bool:
        async with self.transaction() as session:
            return await session.delete(table, record_id)
