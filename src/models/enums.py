"""
Enum definitions for the Car Rental Backend
"""

from enum import Enum

class ReservationStatus(str, Enum):
    """
    Reservation statuses known to the ledger.

    - PENDING: booked, car held
    - ACTIVE: car is out with the customer
    - COMPLETED: car returned, released for new bookings
    - CANCELED: booking dropped, car released

    The status column itself is free text; values outside this enum are stored
    as given and leave car availability unchanged.
    """
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELED = "canceled"

# Statuses that hold the car / release it
HOLDING_STATUSES = {ReservationStatus.PENDING.value, ReservationStatus.ACTIVE.value}
RELEASING_STATUSES = {ReservationStatus.COMPLETED.value, ReservationStatus.CANCELED.value}

class MediaBackend(str, Enum):
    S3 = "s3"
    LOCAL = "local"
