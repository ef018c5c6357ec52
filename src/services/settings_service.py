"""
Site settings service - a single row with id 1
"""

import logging

from database.store import EntityStore, StoreError, StoreSession
from models.site_settings import DEFAULT_SITE_SETTINGS, SiteSettings
from services.base_service import BaseService, ServiceResult, NOT_FOUND

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


class SettingsService(BaseService):

    def __init__(self, store: EntityStore):
        super().__init__(store, "settings", "Settings")

    async def get_settings(self) -> ServiceResult:
        """Stored settings, or the defaults when none were saved yet"""
        result = await self.get_by_id(SETTINGS_ROW_ID)
        if result.success or result.error_type != NOT_FOUND:
            return result
        return ServiceResult.ok([DEFAULT_SITE_SETTINGS.model_dump()])

    async def save_settings(self, new_settings: SiteSettings) -> ServiceResult:
        """Insert or overwrite the settings row"""
        values = new_settings.model_dump()

        async def upsert(tx: StoreSession):
            current = await tx.get("settings", SETTINGS_ROW_ID, for_update=True)
            if current is None:
                return await tx.insert("settings", {"id": SETTINGS_ROW_ID, **values})
            return await tx.update_fields("settings", SETTINGS_ROW_ID, values)

        try:
            row = await self.store.run_in_transaction(upsert)
        except StoreError as e:
            logger.error(f"Failed to save settings: {e}")
            return ServiceResult.from_exception(e)
        logger.info("Site settings saved")
        return ServiceResult.ok([row])
