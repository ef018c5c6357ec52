"""
Site settings Pydantic models
"""

from typing import Optional
from pydantic import BaseModel


class SiteSettings(BaseModel):
    site_name: Optional[str] = None
    phone: Optional[str] = None
    contact_email: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    address: Optional[str] = None
    gps: Optional[str] = None
    maintenance_mode: bool = False


DEFAULT_SITE_SETTINGS = SiteSettings(
    site_name="Luxury Drive",
    phone="212000000",
    contact_email="admin@luxurydrive.com",
    facebook="facebook.com",
    instagram="instagram.com",
    address="address",
    gps="gps",
    maintenance_mode=False,
)
