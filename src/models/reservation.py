"""
Reservation-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel, Field


class ReservationData(BaseModel):
    id: int
    customer_id: int
    car_id: int
    start_date: str
    end_date: str
    total: float
    status: str


class ReservationDetail(ReservationData):
    """Reservation joined with its customer and car"""
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    car_name: Optional[str] = None
    car_price: Optional[float] = None


class ReservationRequest(BaseModel):
    """Body for creating or rescheduling a reservation"""
    customer_id: int = Field(..., gt=0)
    car_id: int = Field(..., gt=0)
    start_date: str = Field(..., min_length=1, description="ISO date or date-time")
    end_date: str = Field(..., min_length=1, description="ISO date or date-time")
    status: Optional[str] = Field(None, description="pending, active, completed or canceled")
