"""
Testimonial API routes
"""

from typing import List
from fastapi import APIRouter, Depends

from api.dependencies import get_testimonials_service
from models.testimonial import TestimonialData, TestimonialRequest
from services.testimonials_service import TestimonialsService
from utils.error_handling import raise_for_result

router = APIRouter()

@router.get("", response_model=List[TestimonialData])
async def list_testimonials(service: TestimonialsService = Depends(get_testimonials_service)):
    """Newest first"""
    result = await service.list_newest_first()
    raise_for_result(result)
    return result.data

@router.post("", response_model=TestimonialData, status_code=201)
async def create_testimonial(
    request: TestimonialRequest,
    service: TestimonialsService = Depends(get_testimonials_service)
):
    result = await service.create(request.model_dump())
    raise_for_result(result)
    return result.data[0]

@router.put("/{testimonial_id}", response_model=TestimonialData)
async def update_testimonial(
    testimonial_id: int,
    request: TestimonialRequest,
    service: TestimonialsService = Depends(get_testimonials_service)
):
    result = await service.update(testimonial_id, request.model_dump())
    raise_for_result(result)
    return result.data[0]

@router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: int,
    service: TestimonialsService = Depends(get_testimonials_service)
):
    result = await service.delete(testimonial_id)
    raise_for_result(result)
    return {
        "message": "Testimonial deleted successfully",
        "deleted_testimonial_id": testimonial_id
    }
