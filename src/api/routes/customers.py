"""
Customer API routes
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from api.dependencies import get_customers_service
from models.customer import CustomerCreateRequest, CustomerData, CustomerUpdateRequest
from services.customers_service import CustomersService
from utils.error_handling import raise_for_result

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[CustomerData])
async def list_customers(service: CustomersService = Depends(get_customers_service)):
    result = await service.list()
    raise_for_result(result)
    return result.data

@router.get("/{customer_id}", response_model=CustomerData)
async def get_customer(customer_id: int, service: CustomersService = Depends(get_customers_service)):
    result = await service.get_by_id(customer_id)
    raise_for_result(result)
    return result.data[0]

@router.post("", response_model=CustomerData, status_code=201)
async def create_customer(
    request: CustomerCreateRequest,
    service: CustomersService = Depends(get_customers_service)
):
    result = await service.create_customer(request.name, request.phone, request.email)
    raise_for_result(result)
    return result.data[0]

@router.put("/{customer_id}", response_model=CustomerData)
async def update_customer(
    customer_id: int,
    request: CustomerUpdateRequest,
    service: CustomersService = Depends(get_customers_service)
):
    result = await service.update_customer(customer_id, request.name, request.phone, request.email)
    raise_for_result(result)
    return result.data[0]

@router.delete("/{customer_id}")
async def delete_customer(customer_id: int, service: CustomersService = Depends(get_customers_service)):
    """Delete a customer and all of their reservations"""
    result = await service.delete(customer_id)
    raise_for_result(result)
    return {
        "message": "Customer deleted successfully",
        "deleted_customer_id": customer_id
    }
