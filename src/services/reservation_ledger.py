"""
Reservation ledger - reservation lifecycle and the car/customer aggregates it drives

Every reservation write touches three rows: the reservation, its car
(availability and reservations_count) and its customer (reservations_count and
total_spent). Each operation runs in one store transaction with the car row
locked, so a concurrent create cannot double-book a car and a failure part-way
leaves nothing behind.

Aggregates are only moved by create and delete. update re-prices the booking and
flips availability from the new status, but leaves the counters alone.
"""

import logging
from typing import Any, Dict, Optional

from database.store import EntityStore, StoreError, StoreSession
from models.enums import HOLDING_STATUSES, RELEASING_STATUSES, ReservationStatus
from services.base_service import (
    ConflictError,
    NotFoundError,
    ServiceError,
    ServiceResult,
    ValidationError,
)
from services.pricing import reservation_cost

logger = logging.getLogger(__name__)


class ReservationLedger:
    """Creates, reschedules and deletes reservations"""

    def __init__(self, store: EntityStore):
        self.store = store

    async def create(
        self,
        customer_id: int,
        car_id: int,
        start_date: str,
        end_date: str,
        status: Optional[str] = None,
    ) -> ServiceResult:
        """
        Book a car for a customer

        Args:
            customer_id: Customer making the booking
            car_id: Car to book; must exist and be available
            start_date: ISO date or date-time
            end_date: ISO date or date-time, not before start_date
            status: Initial status (default: pending)

        Returns:
            ServiceResult with the created reservation, or error_type
            VALIDATION_ERROR, NOT_FOUND, CONFLICT or STORE_FAILURE
        """
        logger.info(f"Creating reservation: customer {customer_id}, car {car_id}, {start_date} -> {end_date}")
        try:
            async with self.store.transaction() as tx:
                car = await self._require(tx, "cars", car_id, "Car", lock=True)
                if not car["available"]:
                    raise ConflictError(f"Car {car_id} is not available")
                await self._require(tx, "customers", customer_id, "Customer", lock=True)

                total = self._price(car, start_date, end_date)
                reservation = await tx.insert("reservations", {
                    "customer_id": customer_id,
                    "car_id": car_id,
                    "start_date": start_date,
                    "end_date": end_date,
                    "total": total,
                    "status": status or ReservationStatus.PENDING.value,
                })
                await tx.update_fields(
                    "cars", car_id,
                    values={"available": False},
                    increments={"reservations_count": 1},
                )
                await tx.update_fields(
                    "customers", customer_id,
                    increments={"reservations_count": 1, "total_spent": total},
                )
        except (ServiceError, StoreError) as e:
            self._log_failure("create", e)
            return ServiceResult.from_exception(e)

        logger.info(f"Created reservation {reservation['id']} (total {total})")
        return ServiceResult.ok([reservation])

    async def update(
        self,
        reservation_id: int,
        customer_id: int,
        car_id: int,
        start_date: str,
        end_date: str,
        status: Optional[str] = None,
    ) -> ServiceResult:
        """
        Reschedule a reservation and/or change its status

        The total is recomputed from the car's current price, and the car's
        availability follows the new status: completed/canceled release it,
        pending/active hold it, anything else (including no status at all)
        leaves it as is. The stored status still defaults to pending.
        Reservation counters and customer spend are not adjusted.
        """
        new_status = status or ReservationStatus.PENDING.value
        logger.info(f"Updating reservation {reservation_id}: car {car_id}, status {new_status}")
        try:
            async with self.store.transaction() as tx:
                # Lock order everywhere: reservation, car, customer
                await self._require(tx, "reservations", reservation_id, "Reservation", lock=True)
                car = await self._require(tx, "cars", car_id, "Car", lock=True)
                await self._require(tx, "customers", customer_id, "Customer")

                total = self._price(car, start_date, end_date)
                reservation = await tx.update_fields("reservations", reservation_id, values={
                    "customer_id": customer_id,
                    "car_id": car_id,
                    "start_date": start_date,
                    "end_date": end_date,
                    "total": total,
                    "status": new_status,
                })

                if status in RELEASING_STATUSES:
                    await tx.update_fields("cars", car_id, values={"available": True})
                elif status in HOLDING_STATUSES:
                    await tx.update_fields("cars", car_id, values={"available": False})
        except (ServiceError, StoreError) as e:
            self._log_failure("update", e)
            return ServiceResult.from_exception(e)

        logger.info(f"Updated reservation {reservation_id} (total {total}, status {new_status})")
        return ServiceResult.ok([reservation])

    async def delete(self, reservation_id: int) -> ServiceResult:
        """
        Delete a reservation and reverse its effect on the car and customer

        The car is released and both reservation counters and the customer's
        spend are decremented. Values are not floored at zero.
        """
        logger.info(f"Deleting reservation {reservation_id}")
        try:
            async with self.store.transaction() as tx:
                reservation = await self._require(tx, "reservations", reservation_id, "Reservation", lock=True)
                car_id = reservation["car_id"]
                customer_id = reservation["customer_id"]
                total = reservation["total"]

                await tx.delete("reservations", reservation_id)
                await tx.update_fields(
                    "cars", car_id,
                    values={"available": True},
                    increments={"reservations_count": -1},
                )
                await tx.update_fields(
                    "customers", customer_id,
                    increments={"reservations_count": -1, "total_spent": -total},
                )
        except (ServiceError, StoreError) as e:
            self._log_failure("delete", e)
            return ServiceResult.from_exception(e)

        logger.info(f"Deleted reservation {reservation_id}")
        return ServiceResult(success=True, data=[reservation], count=1)

    async def get(self, reservation_id: int) -> ServiceResult:
        try:
            reservation = await self.store.get("reservations", reservation_id)
        except StoreError as e:
            self._log_failure("get", e)
            return ServiceResult.from_exception(e)
        if reservation is None:
            return ServiceResult.fail("Reservation not found", NotFoundError.error_type)
        return ServiceResult.ok([reservation])

    async def list_detailed(self) -> ServiceResult:
        """All reservations with customer name/phone and car name/price"""
        try:
            async with self.store.session() as session:
                reservations = await session.list("reservations")
                customers = {row["id"]: row for row in await session.list("customers")}
                cars = {row["id"]: row for row in await session.list("cars")}
        except StoreError as e:
            self._log_failure("list", e)
            return ServiceResult.from_exception(e)

        rows = []
        for reservation in reservations:
            customer = customers.get(reservation["customer_id"])
            car = cars.get(reservation["car_id"])
            if customer is None or car is None:
                continue
            rows.append({
                **reservation,
                "customer_name": customer["name"],
                "customer_phone": customer["phone"],
                "car_name": car["name"],
                "car_price": car["price"],
            })
        return ServiceResult.ok(rows)

    @staticmethod
    async def _require(
        tx: StoreSession,
        table: str,
        record_id: int,
        label: str,
        lock: bool = False,
    ) -> Dict[str, Any]:
        row = await tx.get(table, record_id, for_update=lock)
        if row is None:
            raise NotFoundError(f"{label} {record_id} not found")
        return row

    @staticmethod
    def _price(car: Dict[str, Any], start_date: str, end_date: str) -> float:
        try:
            return reservation_cost(car["price"], start_date, end_date)
        except ValueError as e:
            raise ValidationError(str(e)) from e

    @staticmethod
    def _log_failure(operation: str, error: Exception) -> None:
        if isinstance(error, ServiceError):
            logger.warning(f"Reservation {operation} rejected: {error}")
        else:
            logger.error(f"Reservation {operation} failed, transaction rolled back: {error}")
