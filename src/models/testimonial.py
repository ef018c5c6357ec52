"""
Testimonial Pydantic models
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TestimonialData(BaseModel):
    id: int
    name: str
    role: str
    content: str
    rating: int
    created_at: Optional[datetime] = None


class TestimonialRequest(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
