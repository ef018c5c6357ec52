"""
Cars service - car catalog with image storage
"""

import logging
from typing import Dict, Any, Optional

from database.store import EntityStore, StoreError
from services.base_service import BaseService, ServiceResult, NOT_FOUND, VALIDATION_ERROR
from services.media_storage import MediaStorage, InvalidImageError, validate_image

logger = logging.getLogger(__name__)


class CarsService(BaseService):
    """Service for car catalog operations"""

    def __init__(self, store: EntityStore, media: MediaStorage):
        super().__init__(store, "cars", "Car")
        self.media = media

    async def create_car(
        self,
        fields: Dict[str, Any],
        image_data: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> ServiceResult:
        """
        Create a car after uploading its image

        Args:
            fields: Column values (name, brand, price, available, ...)
            image_data: Raw image bytes (required)
            filename: Original file name, used for the extension
            content_type: MIME type reported by the client

        Returns:
            ServiceResult with the created car
        """
        try:
            validate_image(image_data, filename, content_type)
        except InvalidImageError as e:
            return ServiceResult.fail(str(e), VALIDATION_ERROR)

        image_url = await self.media.store(image_data, filename, content_type or "image/png")
        result = await self.create({**fields, "image_url": image_url})
        if not result.success:
            await self.media.delete(image_url)
        return result

    async def update_car(
        self,
        car_id: int,
        fields: Dict[str, Any],
        image_data: Optional[bytes] = None,
        filename: Optional[str] = None,
        content_type: Optional[str] = None
    ) -> ServiceResult:
        """
        Update car details, optionally replacing its image

        The previous image is removed only after the row points at the new one,
        and a failed removal is logged, not reported.
        """
        existing = await self.get_by_id(car_id)
        if not existing.success:
            return existing
        old_image_url = existing.data[0].get("image_url")

        new_image_url = None
        if image_data:
            try:
                validate_image(image_data, filename, content_type)
            except InvalidImageError as e:
                return ServiceResult.fail(str(e), VALIDATION_ERROR)
            new_image_url = await self.media.store(image_data, filename, content_type or "image/png")

        updates = dict(fields)
        if new_image_url:
            updates["image_url"] = new_image_url

        result = await self.update(car_id, updates)
        if not result.success:
            if new_image_url:
                await self.media.delete(new_image_url)
            return result

        if new_image_url and old_image_url:
            await self.media.delete(old_image_url)
        return result

    async def delete_car(self, car_id: int) -> ServiceResult:
        """Delete a car with its reservations, then drop its image"""
        try:
            async with self.store.transaction() as tx:
                car = await tx.get("cars", car_id, for_update=True)
                if car is None:
                    return ServiceResult.fail("Car not found", NOT_FOUND)
                await tx.delete("cars", car_id)
        except StoreError as e:
            logger.error(f"Failed to delete car {car_id}: {e}")
            return ServiceResult.from_exception(e)

        logger.info(f"Deleted car {car_id} and its reservations")
        if car.get("image_url"):
            await self.media.delete(car["image_url"])
        return ServiceResult(success=True, data=[{"id": car_id}], count=1)
