"""
Car Rental Back-Office API Server
Core functionality: Cars, Customers, Reservations, Site Settings, Testimonials
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config.settings import ALLOWED_ORIGINS
from database.connection import init_database
from database.store import EntityStore
from api.routes import health, cars, customers, reservations, settings, testimonials
from services.media_storage import LocalMediaStorage, MediaStorage, create_media_storage
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(store: Optional[EntityStore] = None, media: Optional[MediaStorage] = None) -> FastAPI:
    """
    Build the application.

    With no store given, the lifespan opens the Postgres pools on startup and
    closes them on shutdown. A store passed in (e.g. the in-memory one) is used
    as is and left open.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = await init_database()
        yield
        if owns_store:
            await app.state.store.close()
            app.state.store = None

    app = FastAPI(
        title="Luxury Drive Car Rental Backend",
        description="Back-office API for cars, customers, reservations, site settings and testimonials",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.store = store
    app.state.media = media or create_media_storage()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Setup centralized error handling
    setup_error_handling(app)

    # Include API routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(cars.router, prefix="/api/cars", tags=["Cars"])
    app.include_router(customers.router, prefix="/api/customers", tags=["Customers"])
    app.include_router(reservations.router, prefix="/api/reservations", tags=["Reservations"])
    app.include_router(settings.router, prefix="/api/settings", tags=["Settings"])
    app.include_router(testimonials.router, prefix="/api/testimonials", tags=["Testimonials"])

    # Locally stored car images
    if isinstance(app.state.media, LocalMediaStorage):
        app.mount(
            app.state.media.url_prefix,
            StaticFiles(directory=str(app.state.media.upload_dir)),
            name="uploads"
        )
    logger.info(f"Application created with {type(app.state.media).__name__}")
    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
