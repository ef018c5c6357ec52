"""
Customers service
"""

import logging
from typing import Optional

from database.store import EntityStore
from services.base_service import BaseService, ServiceResult

logger = logging.getLogger(__name__)


class CustomersService(BaseService):
    """Service for customer records; spend and counters are owned by the reservation ledger"""

    def __init__(self, store: EntityStore):
        super().__init__(store, "customers", "Customer")

    async def create_customer(self, name: str, phone: str, email: Optional[str] = None) -> ServiceResult:
        logger.info(f"Creating customer: {name}")
        return await self.create({"name": name, "phone": phone, "email": email or None})

    async def update_customer(
        self,
        customer_id: int,
        name: str,
        phone: str,
        email: Optional[str] = None
    ) -> ServiceResult:
        return await self.update(customer_id, {"name": name, "phone": phone, "email": email or None})
