"""
Shared pytest fixtures
Every test runs against a fresh in-memory entity store; images go to a temp dir.
"""

import io
import os
import tempfile

# Must be set before config.settings is imported
os.environ["MEDIA_BACKEND"] = "local"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="car-rental-uploads-"))

import httpx
import pytest
import pytest_asyncio
from PIL import Image

from app import create_app
from database.memory_store import InMemoryEntityStore
from services.media_storage import LocalMediaStorage
from services.reservation_ledger import ReservationLedger


def make_image_bytes(fmt: str = "PNG") -> bytes:
    """Small valid image in the given format"""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest_asyncio.fixture
async def store():
    """Fresh in-memory store (created inside the running event loop)"""
    return InMemoryEntityStore()


@pytest_asyncio.fixture
async def ledger(store):
    return ReservationLedger(store)


@pytest_asyncio.fixture
async def car(store):
    """Available car at 50 per day"""
    return await store.insert("cars", {
        "name": "Model A",
        "brand": "Acme",
        "price": 50.0,
        "available": True,
        "description": "Compact",
        "acceleration": "8s",
        "consumption": "6L",
        "power": "120hp",
    })


@pytest_asyncio.fixture
async def customer(store):
    return await store.insert("customers", {"name": "Alice", "phone": "0600000001"})


@pytest_asyncio.fixture
async def other_customer(store):
    return await store.insert("customers", {"name": "Bob", "phone": "0600000002"})


@pytest.fixture
def media(tmp_path):
    return LocalMediaStorage(str(tmp_path / "uploads"))


@pytest_asyncio.fixture
async def client(store, media):
    """HTTP client bound to an app wired to the in-memory store"""
    app = create_app(store=store, media=media)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def png_bytes():
    return make_image_bytes("PNG")
