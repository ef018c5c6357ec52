"""
Car-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel


class CarData(BaseModel):
    id: int
    name: str
    brand: str
    price: float
    available: bool
    image_url: Optional[str] = None
    description: Optional[str] = None
    acceleration: Optional[str] = None
    consumption: Optional[str] = None
    power: Optional[str] = None
    reservations_count: int = 0
    vote: Optional[int] = 0
