"""
In-memory entity store: CRUD, increments, foreign keys, cascade and rollback
"""

import asyncio

import pytest

from database.memory_store import InMemoryEntityStore
from database.store import StoreError


class TestInMemoryEntityStore:

    async def test_insert_assigns_ids_and_defaults(self, store):
        first = await store.insert("customers", {"name": "Alice", "phone": "1"})
        second = await store.insert("customers", {"name": "Bob", "phone": "2"})

        assert (first["id"], second["id"]) == (1, 2)
        assert first["reservations_count"] == 0
        assert first["total_spent"] == 0.0
        assert first["email"] is None

    async def test_ids_are_not_reused_after_delete(self, store):
        first = await store.insert("customers", {"name": "Alice", "phone": "1"})
        await store.delete("customers", first["id"])
        second = await store.insert("customers", {"name": "Bob", "phone": "2"})

        assert second["id"] == 2
        assert await store.get("customers", 2) is not None

    async def test_update_fields_assigns_and_increments(self, store, customer):
        row = await store.update_fields(
            "customers", customer["id"],
            values={"name": "Alicia"},
            increments={"reservations_count": 2, "total_spent": 75.5},
        )
        assert row["name"] == "Alicia"
        assert row["reservations_count"] == 2
        assert row["total_spent"] == 75.5

    async def test_update_missing_row_returns_none(self, store):
        assert await store.update_fields("customers", 99, values={"name": "x"}) is None

    async def test_unknown_column_rejected(self, store):
        with pytest.raises(ValueError):
            await store.insert("customers", {"name": "x", "phone": "1", "password": "nope"})

    async def test_foreign_key_enforced(self, store, car):
        with pytest.raises(StoreError):
            await store.insert("reservations", {
                "customer_id": 42, "car_id": car["id"],
                "start_date": "2024-01-01", "end_date": "2024-01-02", "total": 50.0,
            })

    async def test_deleting_parent_cascades_to_reservations(self, store, car, customer):
        reservation = await store.insert("reservations", {
            "customer_id": customer["id"], "car_id": car["id"],
            "start_date": "2024-01-01", "end_date": "2024-01-02", "total": 50.0,
        })

        assert await store.delete("cars", car["id"]) is True
        assert await store.get("reservations", reservation["id"]) is None
        assert await store.get("customers", customer["id"]) is not None

    async def test_delete_missing_row(self, store):
        assert await store.delete("cars", 7) is False

    async def test_list_ordering(self, store):
        for name in ("b", "c", "a"):
            await store.insert("customers", {"name": name, "phone": "1"})

        by_id = await store.list("customers")
        by_name_desc = await store.list("customers", order_by="name", descending=True)

        assert [row["name"] for row in by_id] == ["b", "c", "a"]
        assert [row["name"] for row in by_name_desc] == ["c", "b", "a"]

    async def test_failed_transaction_rolls_back(self, store, customer):
        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                await tx.update_fields("customers", customer["id"], increments={"total_spent": 10})
                await tx.insert("customers", {"name": "Ghost", "phone": "0"})
                raise RuntimeError("boom")

        rows = await store.list("customers")
        assert len(rows) == 1
        assert rows[0]["total_spent"] == 0.0

    async def test_run_in_transaction_returns_result(self, store, customer):
        async def rename(tx):
            return await tx.update_fields("customers", customer["id"], values={"name": "Renamed"})

        row = await store.run_in_transaction(rename)
        assert row["name"] == "Renamed"

    async def test_transactions_are_serialized(self, store, customer):
        order = []

        async def worker(tag):
            async with store.transaction() as tx:
                order.append(f"{tag}-start")
                await tx.get("customers", customer["id"])
                await asyncio.sleep(0)
                order.append(f"{tag}-end")

        await asyncio.gather(worker("a"), worker("b"))
        assert order in (
            ["a-start", "a-end", "b-start", "b-end"],
            ["b-start", "b-end", "a-start", "a-end"],
        )

    async def test_reads_never_see_uncommitted_rows(self, store, customer):
        inserted = asyncio.Event()
        seen = []

        async def failing_writer():
            with pytest.raises(RuntimeError):
                async with store.transaction() as tx:
                    await tx.insert("customers", {"name": "Ghost", "phone": "0"})
                    inserted.set()
                    await asyncio.sleep(0)
                    await asyncio.sleep(0)
                    raise RuntimeError("boom")

        async def reader():
            await inserted.wait()
            seen.extend(row["name"] for row in await store.list("customers"))

        await asyncio.gather(failing_writer(), reader())
        assert seen == [customer["name"]]

    async def test_ping(self):
        assert await InMemoryEntityStore().ping() is True
