"""
FastAPI dependencies resolving the store and services held on app.state
"""

from fastapi import Depends, Request

from database.store import EntityStore
from services.cars_service import CarsService
from services.customers_service import CustomersService
from services.media_storage import MediaStorage
from services.reservation_ledger import ReservationLedger
from services.settings_service import SettingsService
from services.testimonials_service import TestimonialsService


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_media_storage(request: Request) -> MediaStorage:
    return request.app.state.media


def get_reservation_ledger(store: EntityStore = Depends(get_store)) -> ReservationLedger:
    return ReservationLedger(store)


def get_cars_service(
    store: EntityStore = Depends(get_store),
    media: MediaStorage = Depends(get_media_storage),
) -> CarsService:
    return CarsService(store, media)


def get_customers_service(store: EntityStore = Depends(get_store)) -> CustomersService:
    return CustomersService(store)


def get_settings_service(store: EntityStore = Depends(get_store)) -> SettingsService:
    return SettingsService(store)


def get_testimonials_service(store: EntityStore = Depends(get_store)) -> TestimonialsService:
    return TestimonialsService(store)
