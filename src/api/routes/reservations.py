"""
Reservation API routes
All writes go through the reservation ledger so car availability and the cached
car/customer aggregates move together with the reservation rows.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from api.dependencies import get_reservation_ledger
from models.reservation import ReservationData, ReservationDetail, ReservationRequest
from services.reservation_ledger import ReservationLedger
from utils.error_handling import raise_for_result

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=List[ReservationDetail])
async def list_reservations(ledger: ReservationLedger = Depends(get_reservation_ledger)):
    """List reservations with customer and car details"""
    result = await ledger.list_detailed()
    raise_for_result(result)
    return result.data

@router.get("/{reservation_id}", response_model=ReservationData)
async def get_reservation(
    reservation_id: int,
    ledger: ReservationLedger = Depends(get_reservation_ledger)
):
    result = await ledger.get(reservation_id)
    raise_for_result(result)
    return result.data[0]

@router.post("", response_model=ReservationData, status_code=201)
async def create_reservation(
    request: ReservationRequest,
    ledger: ReservationLedger = Depends(get_reservation_ledger)
):
    """Book a car; 409 if the car is not available"""
    result = await ledger.create(
        customer_id=request.customer_id,
        car_id=request.car_id,
        start_date=request.start_date,
        end_date=request.end_date,
        status=request.status
    )
    raise_for_result(result)
    return result.data[0]

@router.put("/{reservation_id}", response_model=ReservationData)
async def update_reservation(
    reservation_id: int,
    request: ReservationRequest,
    ledger: ReservationLedger = Depends(get_reservation_ledger)
):
    """Reschedule a reservation or change its status"""
    result = await ledger.update(
        reservation_id,
        customer_id=request.customer_id,
        car_id=request.car_id,
        start_date=request.start_date,
        end_date=request.end_date,
        status=request.status
    )
    raise_for_result(result)
    return result.data[0]

@router.delete("/{reservation_id}")
async def delete_reservation(
    reservation_id: int,
    ledger: ReservationLedger = Depends(get_reservation_ledger)
):
    """Delete a reservation and release its car"""
    result = await ledger.delete(reservation_id)
    raise_for_result(result)
    return {
        "message": "Reservation deleted successfully",
        "deleted_reservation_id": reservation_id
    }
