"""
Reservation ledger against a real PostgreSQL database

Runs only when TEST_DATABASE_URL points at a disposable database; the tables are
created if missing and every row a test writes is removed afterwards.
"""

import asyncio
import os

import pytest
import pytest_asyncio

from database.connection import init_database
from database.store import StoreError
from services.reservation_ledger import ReservationLedger

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not TEST_DATABASE_URL, reason="TEST_DATABASE_URL not set"),
]


@pytest_asyncio.fixture
async def pg_store():
    store = await init_database(TEST_DATABASE_URL, TEST_DATABASE_URL)
    yield store
    await store.close()


@pytest_asyncio.fixture
async def pg_rows(pg_store):
    """A car at 50/day and two customers, deleted (with their reservations) afterwards"""
    car = await pg_store.insert("cars", {
        "name": "Integration", "brand": "Acme", "price": 50.0, "available": True,
    })
    alice = await pg_store.insert("customers", {"name": "Alice", "phone": "1"})
    bob = await pg_store.insert("customers", {"name": "Bob", "phone": "2"})
    yield {"car": car, "alice": alice, "bob": bob}
    await pg_store.delete("cars", car["id"])
    await pg_store.delete("customers", alice["id"])
    await pg_store.delete("customers", bob["id"])


class TestPostgresLedger:

    async def test_create_then_delete_restores_aggregates(self, pg_store, pg_rows):
        ledger = ReservationLedger(pg_store)
        car, alice = pg_rows["car"], pg_rows["alice"]

        created = await ledger.create(alice["id"], car["id"], "2024-01-01", "2024-01-03")
        assert created.success, created.error
        assert created.data[0]["total"] == 100

        booked = await pg_store.get("cars", car["id"])
        assert booked["available"] is False
        assert booked["reservations_count"] == 1
        assert (await pg_store.get("customers", alice["id"]))["total_spent"] == 100

        deleted = await ledger.delete(created.data[0]["id"])
        assert deleted.success, deleted.error

        released = await pg_store.get("cars", car["id"])
        customer = await pg_store.get("customers", alice["id"])
        assert released["available"] is True
        assert released["reservations_count"] == 0
        assert customer["reservations_count"] == 0
        assert customer["total_spent"] == 0

    async def test_row_lock_prevents_double_booking(self, pg_store, pg_rows):
        ledger = ReservationLedger(pg_store)
        car = pg_rows["car"]

        results = await asyncio.gather(
            ledger.create(pg_rows["alice"]["id"], car["id"], "2024-02-01", "2024-02-02"),
            ledger.create(pg_rows["bob"]["id"], car["id"], "2024-02-01", "2024-02-02"),
        )

        assert sorted(result.success for result in results) == [False, True]
        assert [r.error_type for r in results if not r.success] == ["CONFLICT"]
        assert (await pg_store.get("cars", car["id"]))["reservations_count"] == 1

    async def test_foreign_key_violation_is_a_store_error(self, pg_store, pg_rows):
        with pytest.raises(StoreError):
            await pg_store.insert("reservations", {
                "customer_id": -1, "car_id": pg_rows["car"]["id"],
                "start_date": "2024-01-01", "end_date": "2024-01-02", "total": 1.0, "status": "pending",
            })

    async def test_cascade_on_car_delete(self, pg_store, pg_rows):
        ledger = ReservationLedger(pg_store)
        created = await ledger.create(pg_rows["alice"]["id"], pg_rows["car"]["id"], "2024-03-01", "2024-03-02")

        spare = await pg_store.insert("cars", {"name": "Spare", "brand": "Acme", "price": 10.0, "available": True})
        other = await ledger.create(pg_rows["bob"]["id"], spare["id"], "2024-03-01", "2024-03-02")
        await pg_store.delete("cars", spare["id"])

        assert await pg_store.get("reservations", other.data[0]["id"]) is None
        assert await pg_store.get("reservations", created.data[0]["id"]) is not None
