"""
Car API routes
Cars are created and updated from multipart forms so the image travels with
the fields; the image itself goes to the configured media storage.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.dependencies import get_cars_service
from models.car import CarData
from services.cars_service import CarsService
from utils.error_handling import raise_for_result
from utils.helpers import parse_form_bool

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[CarData])
async def list_cars(service: CarsService = Depends(get_cars_service)):
    result = await service.list()
    raise_for_result(result)
    return result.data

@router.get("/{car_id}", response_model=CarData)
async def get_car(car_id: int, service: CarsService = Depends(get_cars_service)):
    result = await service.get_by_id(car_id)
    raise_for_result(result)
    return result.data[0]

@router.post("", response_model=CarData, status_code=201)
async def create_car(
    name: str = Form(..., min_length=1),
    brand: str = Form(..., min_length=1),
    price: float = Form(..., gt=0),
    available: str = Form(...),
    description: str = Form(..., min_length=1),
    consumption: str = Form(..., min_length=1),
    acceleration: str = Form(..., min_length=1),
    power: str = Form(..., min_length=1),
    image: UploadFile = File(...),
    service: CarsService = Depends(get_cars_service)
):
    """Create a car; every field and the image are required"""
    logger.info(f"Car creation request: {brand} {name}")
    image_data = await image.read()
    result = await service.create_car(
        {
            "name": name,
            "brand": brand,
            "price": price,
            "available": parse_form_bool(available),
            "description": description,
            "consumption": consumption,
            "acceleration": acceleration,
            "power": power,
        },
        image_data,
        image.filename,
        image.content_type
    )
    raise_for_result(result)
    return result.data[0]

@router.put("/{car_id}", response_model=CarData)
async def update_car(
    car_id: int,
    name: str = Form(..., min_length=1),
    brand: str = Form(..., min_length=1),
    price: float = Form(..., gt=0),
    available: str = Form(...),
    description: Optional[str] = Form(None),
    consumption: Optional[str] = Form(None),
    acceleration: Optional[str] = Form(None),
    power: Optional[str] = Form(None),
    vote: Optional[int] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: CarsService = Depends(get_cars_service)
):
    """Update a car; name, brand, price and availability are required, a new image is optional"""
    image_data = await image.read() if image is not None else None
    result = await service.update_car(
        car_id,
        {
            "name": name,
            "brand": brand,
            "price": price,
            "available": parse_form_bool(available),
            "description": description or None,
            "consumption": consumption or None,
            "acceleration": acceleration or None,
            "power": power or None,
            "vote": vote,
        },
        image_data=image_data,
        filename=image.filename if image is not None else None,
        content_type=image.content_type if image is not None else None
    )
    raise_for_result(result)
    return result.data[0]

@router.delete("/{car_id}")
async def delete_car(car_id: int, service: CarsService = Depends(get_cars_service)):
    """Delete a car, its reservations and its image"""
    result = await service.delete_car(car_id)
    raise_for_result(result)
    return {
        "message": "Car deleted successfully",
        "deleted_car_id": car_id
    }
