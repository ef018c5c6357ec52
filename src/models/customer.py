"""
Customer-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel, Field


class CustomerData(BaseModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    reservations_count: int = 0
    total_spent: float = 0.0


class CustomerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None


class CustomerUpdateRequest(CustomerCreateRequest):
    pass
