"""
Testimonials service
"""

from database.store import EntityStore
from services.base_service import BaseService, ServiceResult


class TestimonialsService(BaseService):

    def __init__(self, store: EntityStore):
        super().__init__(store, "testimonials", "Testimonial")

    async def list_newest_first(self) -> ServiceResult:
        return await self.list(order_by="created_at", descending=True)
