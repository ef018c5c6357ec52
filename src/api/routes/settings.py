"""
Site settings API routes
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_settings_service
from models.site_settings import SiteSettings
from services.settings_service import SettingsService
from utils.error_handling import raise_for_result

router = APIRouter()

@router.get("", response_model=SiteSettings)
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    result = await service.get_settings()
    raise_for_result(result)
    return result.data[0]

@router.put("", response_model=SiteSettings)
async def save_settings(request: SiteSettings, service: SettingsService = Depends(get_settings_service)):
    result = await service.save_settings(request)
    raise_for_result(result)
    return result.data[0]
